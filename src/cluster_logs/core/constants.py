"""Core constants for the cluster logs tool.

Values referenced by several modules live here to avoid circular imports.
"""

from enum import Enum

# Environment variable names
ENV_CLUSTER_URL = "CLUSTER_URL"
ENV_ACS_TOKEN = "CLUSTER_ACS_TOKEN"
ENV_USER_AGENT = "CLUSTER_USER_AGENT"
ENV_VERBOSE = "CLUSTER_VERBOSE"
ENV_TIMEOUT = "CLUSTER_TIMEOUT"

# Defaults
DEFAULT_CLUSTER_URL = "http://localhost"
DEFAULT_USER_AGENT = "cluster-logs"
DEFAULT_TIMEOUT = 30.0
DEFAULT_LOG_DIR = "~/.cluster-logs/logs"

# Logging service API
LOGS_API_PREFIX = "/system/v1"
COMPONENT_LOGS_PATH = LOGS_API_PREFIX + "{route}/logs/v2/component{component}"
TASK_LOGS_PATH = LOGS_API_PREFIX + "/logs/v2/task/{task_id}/file/{file}"
TASK_LOGS_CURSOR = "END"

# Content types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_TEXT = "text/plain"
CONTENT_TYPE_EVENT_STREAM = "text/event-stream"


class OutputFormat(str, Enum):
    """Rendering modes for log entries."""

    DEFAULT = "default"
    CAT = "cat"
    JSON = "json"
    JSON_PRETTY = "json-pretty"
