"""Rendering of log entries to a text stream."""

from __future__ import annotations

import json
import logging
from typing import IO, Optional, Union

from pydantic import ValidationError

from ..core.constants import OutputFormat
from .colors import ColorPolicy
from .entry import LogEntry
from .errors import DecodeError

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


def decode_entry(raw: Union[bytes, str]) -> LogEntry:
    """Decode one JSON encoded journal entry.

    Raises:
        DecodeError: If the payload is not a valid entry.
    """
    try:
        return LogEntry.model_validate_json(raw)
    except ValidationError as exc:
        logger.warning("Malformed log entry: %s", exc)
        raise DecodeError(f"malformed log entry: {exc.errors()[0]['msg']}", detail=str(exc)) from exc


class Formatter:
    """Writes entries to ``out`` in one of the supported output formats."""

    def __init__(self, out: IO[str], colors: Optional[ColorPolicy] = None) -> None:
        self.out = out
        self.colors = colors if colors is not None else ColorPolicy.for_stream(out)

    def render(self, entry: LogEntry, output_format: Union[OutputFormat, str] = OutputFormat.DEFAULT) -> None:
        output_format = OutputFormat(output_format or OutputFormat.DEFAULT)

        if output_format in (OutputFormat.JSON, OutputFormat.JSON_PRETTY):
            indent = 4 if output_format is OutputFormat.JSON_PRETTY else None
            separators = None if indent else (",", ":")
            self.out.write(
                json.dumps(
                    entry.to_journal(),
                    indent=indent,
                    separators=separators,
                    sort_keys=True,
                    ensure_ascii=False,
                )
            )
        elif output_format is OutputFormat.CAT:
            self.colors.set_color(self.out, entry.severity)
            self.out.write(entry.message)
            self.colors.reset_color(self.out)
        else:
            self.colors.set_color(self.out, entry.severity)
            self.out.write(self.format_line(entry))
            self.colors.reset_color(self.out)

        self.out.write("\n")

    def render_message(self, entry: LogEntry) -> None:
        """Write only the message of ``entry``, without color or newline."""
        self.out.write(entry.message)

    @staticmethod
    def format_line(entry: LogEntry) -> str:
        fields = entry.journal
        pid = f"[{fields.pid}]" if fields.pid else ""
        date = entry.timestamp.strftime(DATE_FORMAT)
        return f"{date} {fields.syslog_identifier}{pid}: {fields.message}"

    def flush(self) -> None:
        flush = getattr(self.out, "flush", None)
        if flush is not None:
            flush()
