"""Retrieve, follow and render cluster component and task logs."""

__version__ = "0.1.0"
