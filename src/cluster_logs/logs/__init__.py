"""Retrieval, decoding and rendering of cluster logs."""

from .client import (
    ComponentTarget,
    LogsClient,
    RetrievalOptions,
    RetrievalTarget,
    TaskTarget,
)
from .colors import ColorPolicy
from .entry import EntryFields, LogEntry, Severity
from .errors import (
    DecodeError,
    LogsError,
    NoLogsFound,
    SubscriptionError,
    TransportError,
    UnexpectedStatus,
    error_from_response,
)
from .events import Event, EventSubscription
from .formatter import Formatter, decode_entry

__all__ = [
    "ColorPolicy",
    "ComponentTarget",
    "DecodeError",
    "EntryFields",
    "Event",
    "EventSubscription",
    "Formatter",
    "LogEntry",
    "LogsClient",
    "LogsError",
    "NoLogsFound",
    "RetrievalOptions",
    "RetrievalTarget",
    "Severity",
    "SubscriptionError",
    "TaskTarget",
    "TransportError",
    "UnexpectedStatus",
    "decode_entry",
    "error_from_response",
]
