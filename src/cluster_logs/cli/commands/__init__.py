"""Cluster logs CLI commands."""

from .node import node_log
from .task import task_log

__all__ = ["node_log", "task_log"]
