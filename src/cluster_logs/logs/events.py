"""Server-sent event subscriptions for following logs."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Optional, Union

import httpx

from ..core.constants import CONTENT_TYPE_EVENT_STREAM
from ..core.session import ClusterSession, QueryParams
from .errors import SubscriptionError, error_from_response

logger = logging.getLogger(__name__)

_CLOSED = object()


@dataclass(frozen=True, slots=True)
class Event:
    """A single dispatched server-sent event."""

    data: str = ""
    event: str = ""
    id: Optional[str] = None


async def iter_events(lines: AsyncIterator[str]) -> AsyncIterator[Event]:
    """Parse an event stream, given as lines without terminators, into events.

    Events are dispatched on a blank line. Lines starting with ``:`` are
    comments. An event still pending when the stream ends is discarded.
    """
    data: list[str] = []
    event_type = ""
    event_id: Optional[str] = None
    pending = False

    async for line in lines:
        if not line:
            if pending:
                yield Event(data="\n".join(data), event=event_type, id=event_id)
            data, event_type, event_id, pending = [], "", None, False
            continue
        if line.startswith(":"):
            continue

        name, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]
        pending = True
        if name == "data":
            data.append(value)
        elif name == "event":
            event_type = value
        elif name == "id":
            event_id = value


class EventSubscription:
    """Live event stream for one logs endpoint.

    A reader task parses the streaming response and feeds an unbounded queue;
    iterating the subscription consumes that queue until the stream closes,
    fails, or ``unsubscribe()`` is called. Use it as an async context manager
    so the connection is released on every exit path::

        async with EventSubscription(session, path, params) as subscription:
            async for event in subscription:
                ...
    """

    def __init__(
        self,
        session: ClusterSession,
        path: str,
        params: Optional[QueryParams] = None,
    ) -> None:
        self._session = session
        self._path = path
        self._params = list(params or [])
        self._queue: asyncio.Queue[Union[Event, SubscriptionError, object]] = asyncio.Queue()
        self._response: Optional[httpx.Response] = None
        self._reader: Optional[asyncio.Task[None]] = None
        self._closed = False
        self._exhausted = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def subscribe(self) -> None:
        """Open the event stream and start reading it in the background.

        Raises:
            SubscriptionError: If the connection cannot be established
            LogsError: If the server answers with a status other than 200
        """
        if self._response is not None or self._closed:
            raise RuntimeError("subscription already used")

        # Follow is unbounded, so only the connect phase is timed.
        timeout = httpx.Timeout(self._session.timeout, read=None)
        try:
            response = await self._session.open_stream(
                self._path,
                params=self._params,
                accept=CONTENT_TYPE_EVENT_STREAM,
                timeout=timeout,
            )
        except httpx.RequestError as exc:
            raise SubscriptionError(f"failed to open event stream: {exc}") from exc

        if response.status_code != 200:
            try:
                await response.aread()
            finally:
                await response.aclose()
            raise error_from_response(response)

        logger.debug("Subscribed to %s", self._path)
        self._response = response
        self._reader = asyncio.create_task(self._read(response))

    async def _read(self, response: httpx.Response) -> None:
        try:
            async for event in iter_events(response.aiter_lines()):
                self._queue.put_nowait(event)
        except (httpx.HTTPError, httpx.StreamError) as exc:
            if not self._closed:
                logger.warning("Event stream for %s failed: %s", self._path, exc)
                self._queue.put_nowait(
                    SubscriptionError(f"event stream interrupted: {exc}")
                )
        except Exception as exc:
            if not self._closed:
                logger.exception("Event stream for %s failed unexpectedly", self._path)
                self._queue.put_nowait(SubscriptionError(f"event stream failed: {exc}"))
        finally:
            self._queue.put_nowait(_CLOSED)

    async def unsubscribe(self) -> None:
        """Stop reading and release the connection. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True

        reader, self._reader = self._reader, None
        if reader is not None and not reader.done():
            reader.cancel()
            await asyncio.gather(reader, return_exceptions=True)
        if self._response is not None:
            await self._response.aclose()
        # Wake up a consumer blocked on the queue.
        self._queue.put_nowait(_CLOSED)
        logger.debug("Unsubscribed from %s", self._path)

    def __aiter__(self) -> "EventSubscription":
        return self

    async def __anext__(self) -> Event:
        if self._closed or self._exhausted:
            raise StopAsyncIteration
        item = await self._queue.get()
        if self._closed or item is _CLOSED:
            self._exhausted = True
            raise StopAsyncIteration
        if isinstance(item, SubscriptionError):
            self._exhausted = True
            raise item
        return item

    async def __aenter__(self) -> "EventSubscription":
        await self.subscribe()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.unsubscribe()
