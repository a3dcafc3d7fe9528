"""Journal log entry model as served by the cluster logging API."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Dict, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# PRIORITY values as journald writes them, matched exactly
_PRIORITY_STRINGS = frozenset(str(level) for level in range(8))


class Severity(IntEnum):
    """Syslog severity levels."""

    UNKNOWN = -1
    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7

    @classmethod
    def parse(cls, value: Union["Severity", str, int, None]) -> "Severity":
        """Return the severity for a journal PRIORITY value, UNKNOWN if unrecognized."""
        if isinstance(value, Severity):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            level = value
        elif isinstance(value, str) and value in _PRIORITY_STRINGS:
            level = int(value)
        else:
            return cls.UNKNOWN
        if cls.EMERGENCY <= level <= cls.DEBUG:
            return cls(level)
        return cls.UNKNOWN


class EntryFields(BaseModel):
    """Journal fields of an entry. Fields not modelled here are kept as extras."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    message: str = Field(default="", alias="MESSAGE")
    priority: str = Field(default="", alias="PRIORITY")
    syslog_identifier: str = Field(default="", alias="SYSLOG_IDENTIFIER")
    pid: str = Field(default="", alias="_PID")

    @field_validator("message", "priority", "syslog_identifier", "pid", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if value is None:
            return ""
        # journald encodes values that are not valid UTF-8 as byte arrays
        if isinstance(value, list) and all(isinstance(b, int) for b in value):
            return bytes(value).decode("utf-8", errors="replace")
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class LogEntry(BaseModel):
    """One decoded log record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    journal: EntryFields = Field(default_factory=EntryFields, alias="fields")
    cursor: str = Field(
        default="", validation_alias=AliasChoices("cursor", "__CURSOR")
    )
    monotonic_timestamp: int = Field(
        default=0,
        validation_alias=AliasChoices("monotonic_timestamp", "__MONOTONIC_TIMESTAMP"),
    )
    realtime_timestamp: int = Field(
        default=0,
        validation_alias=AliasChoices("realtime_timestamp", "__REALTIME_TIMESTAMP"),
    )

    @field_validator("realtime_timestamp")
    @classmethod
    def _check_realtime_range(cls, value: int) -> int:
        try:
            datetime.fromtimestamp(value // 1_000_000, tz=timezone.utc)
        except (ValueError, OverflowError, OSError) as exc:
            raise ValueError(f"realtime timestamp {value} is out of range") from exc
        return value

    @property
    def message(self) -> str:
        return self.journal.message

    @property
    def severity(self) -> Severity:
        return Severity.parse(self.journal.priority)

    @property
    def timestamp(self) -> datetime:
        """Realtime timestamp in UTC, truncated to whole seconds."""
        return datetime.fromtimestamp(
            self.realtime_timestamp // 1_000_000, tz=timezone.utc
        )

    def to_journal(self) -> Dict[str, Any]:
        """Re-project the entry into the field layout of ``journalctl -o json``."""
        data = self.journal.model_dump(by_alias=True)
        data["__CURSOR"] = self.cursor
        data["__MONOTONIC_TIMESTAMP"] = str(self.monotonic_timestamp)
        data["__REALTIME_TIMESTAMP"] = str(self.realtime_timestamp)
        return data
