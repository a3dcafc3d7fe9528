"""Node commands.

This package contains the commands that print logs of the system components
running on cluster nodes.
"""

from .log.main import node_log

__all__ = ["node_log"]
