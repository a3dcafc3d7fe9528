"""Severity based ANSI colors for terminal output."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import IO, Union

from .entry import Severity

RED = "31"
YELLOW = "33"
BRIGHT_BLUE = "34;1"
DEFAULT = "0"

RESET = "\033[0m"

_SEVERITY_COLORS = {
    # EMERGENCY, ALERT, CRITICAL and ERROR are printed in red.
    Severity.EMERGENCY: RED,
    Severity.ALERT: RED,
    Severity.CRITICAL: RED,
    Severity.ERROR: RED,
    Severity.WARNING: YELLOW,
    Severity.NOTICE: BRIGHT_BLUE,
}


def _is_terminal(stream: IO[str]) -> bool:
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # closed stream
        return False


@dataclass(frozen=True)
class ColorPolicy:
    """Decides whether escape sequences are written and which ones."""

    enabled: bool = False

    @classmethod
    def for_stream(cls, stream: IO[str]) -> "ColorPolicy":
        """Enable colors on UNIX when the stream is a terminal."""
        return cls(enabled=sys.platform != "win32" and _is_terminal(stream))

    def applies(self) -> bool:
        return self.enabled

    @staticmethod
    def code_for(priority: Union[Severity, str, int, None]) -> str:
        color = _SEVERITY_COLORS.get(Severity.parse(priority), DEFAULT)
        return f"\033[0;{color}m"

    def set_color(self, out: IO[str], priority: Union[Severity, str, int, None]) -> None:
        if self.enabled:
            out.write(self.code_for(priority))

    def reset_color(self, out: IO[str]) -> None:
        if self.enabled:
            out.write(RESET)
