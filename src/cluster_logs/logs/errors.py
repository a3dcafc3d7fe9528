"""Error taxonomy for log retrieval and the status code mapping shared by
historical and live requests."""

from __future__ import annotations

from typing import Optional

import httpx

_DETAIL_LIMIT = 200


class LogsError(Exception):
    """Base class for errors raised while retrieving or rendering logs."""

    code = "logs_error"

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict[str, Optional[str]]:
        return {"code": self.code, "message": self.message, "detail": self.detail}


class NoLogsFound(LogsError):
    """The server has no entries for the request (HTTP 204)."""

    code = "no_logs"

    def __init__(self, message: str = "no logs found") -> None:
        super().__init__(message)


class UnexpectedStatus(LogsError):
    """A non-error status other than 200 came back."""

    code = "unexpected_status"

    def __init__(self, status_code: int) -> None:
        super().__init__(f"unexpected status code {status_code}")
        self.status_code = status_code


class TransportError(LogsError):
    """The request failed at the HTTP layer.

    ``response`` is set when the server answered with status >= 400 so callers
    can inspect it before deciding to retry. It is ``None`` when no response
    was received at all.
    """

    code = "transport_error"

    def __init__(
        self,
        message: str,
        response: Optional[httpx.Response] = None,
        detail: Optional[str] = None,
    ) -> None:
        super().__init__(message, detail=detail)
        self.response = response

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response is not None else None


class DecodeError(LogsError):
    """A log record could not be decoded."""

    code = "decode_error"


class SubscriptionError(LogsError):
    """The live event stream could not be established or broke while reading."""

    code = "subscription_error"


def _response_detail(response: httpx.Response) -> Optional[str]:
    try:
        text = response.text
    except httpx.ResponseNotRead:
        return None
    text = text.strip()
    if not text:
        return None
    return text[:_DETAIL_LIMIT]


def error_from_response(response: httpx.Response) -> LogsError:
    """Map a response that is not a plain 200 to a logs error.

    Streamed responses should be read before calling this so the body is
    available as detail.
    """
    status = response.status_code
    if status == 204:
        return NoLogsFound()
    if status < 400:
        return UnexpectedStatus(status)
    message = f"HTTP {status} {response.reason_phrase or 'error'}"
    try:
        message += f" for {response.request.url}"
    except RuntimeError:
        pass
    return TransportError(
        message,
        response=response,
        detail=_response_detail(response),
    )
