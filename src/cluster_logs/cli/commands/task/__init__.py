"""Task commands."""

from .log.main import task_log

__all__ = ["task_log"]
