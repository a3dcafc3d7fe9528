"""Client for retrieving and following cluster logs."""

from __future__ import annotations

import codecs
import io
import logging
from dataclasses import dataclass, field
from typing import IO, Callable, List, Optional, Sequence, Tuple, Union

import httpx

from ..core.constants import (
    COMPONENT_LOGS_PATH,
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_TEXT,
    TASK_LOGS_CURSOR,
    TASK_LOGS_PATH,
    OutputFormat,
)
from ..core.session import ClusterSession
from .colors import ColorPolicy
from .entry import LogEntry
from .errors import TransportError, error_from_response
from .events import EventSubscription
from .formatter import Formatter, decode_entry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetrievalOptions:
    """Options that can be set via flags on the logs commands."""

    filters: Sequence[str] = field(default_factory=tuple)
    follow: bool = False
    format: OutputFormat = OutputFormat.DEFAULT
    skip: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "filters", tuple(self.filters))
        object.__setattr__(self, "format", OutputFormat(self.format or OutputFormat.DEFAULT))


def _leading_slash(value: str) -> str:
    if value and not value.startswith("/"):
        return "/" + value
    return value


@dataclass(frozen=True)
class ComponentTarget:
    """Logs of a system component, ``route`` locates the node ("" for the leader)."""

    route: str = ""
    component: str = ""

    def path(self) -> str:
        return COMPONENT_LOGS_PATH.format(
            route=_leading_slash(self.route),
            component=_leading_slash(self.component),
        )

    def params(self, options: RetrievalOptions) -> List[Tuple[str, str]]:
        params = [("skip", str(options.skip))]
        params.extend(("filter", expression) for expression in options.filters)
        return params


@dataclass(frozen=True)
class TaskTarget:
    """Logs of one file in a task's sandbox."""

    task_id: str
    file: str = "stdout"

    def path(self) -> str:
        return TASK_LOGS_PATH.format(task_id=self.task_id, file=self.file)

    def params(self, options: RetrievalOptions) -> List[Tuple[str, str]]:
        return [("cursor", TASK_LOGS_CURSOR), ("skip", str(options.skip))]


RetrievalTarget = Union[ComponentTarget, TaskTarget]


async def _raise_for_status(response: httpx.Response) -> None:
    if response.status_code != 200:
        await response.aread()
        raise error_from_response(response)


def _write_raw(out: IO, chunk: bytes, decoder: codecs.IncrementalDecoder) -> None:
    """Write undecoded bytes to ``out``, through its binary buffer when it has one.

    Text-only sinks get the bytes decoded as UTF-8 with replacement.
    """
    buffer = getattr(out, "buffer", None)
    if buffer is not None:
        out.flush()
        buffer.write(chunk)
        buffer.flush()
    elif isinstance(out, (io.RawIOBase, io.BufferedIOBase)):
        out.write(chunk)
    else:
        out.write(decoder.decode(chunk, final=not chunk))


class LogsClient:
    """Retrieves logs from the cluster's logging API and renders them to ``out``."""

    def __init__(
        self,
        session: ClusterSession,
        out: IO[str],
        colors: Optional[ColorPolicy] = None,
    ) -> None:
        self.session = session
        self.out = out
        self.formatter = Formatter(out, colors)

    async def print_component(
        self, route: str, component: str, options: RetrievalOptions
    ) -> None:
        """Print a component's logs, following them if ``options.follow`` is set."""
        if options.follow:
            await self.follow(ComponentTarget(route, component), options)
        else:
            await self.fetch_component_logs(route, component, options)

    async def print_task(self, task_id: str, file: str, options: RetrievalOptions) -> None:
        """Print a task's logs, following them if ``options.follow`` is set."""
        if options.follow:
            await self.follow(TaskTarget(task_id, file), options)
        else:
            await self.fetch_task_log(task_id, file, options)

    async def fetch_component_logs(
        self, route: str, component: str, options: RetrievalOptions
    ) -> None:
        """Fetch a bounded range of component log entries and render each one.

        Raises:
            NoLogsFound: If the server has no entries (HTTP 204)
            UnexpectedStatus: If the server answers with another non-error status
            TransportError: If the request fails or the server returns an error
            DecodeError: If a line of the response is not a valid entry
        """
        target = ComponentTarget(route, component)
        logger.debug("Fetching component logs from %s", target.path())
        try:
            async with self.session.stream(
                target.path(), params=target.params(options), accept=CONTENT_TYPE_JSON
            ) as response:
                await _raise_for_status(response)
                async for line in response.aiter_lines():
                    if not line.strip():
                        continue
                    self.formatter.render(decode_entry(line), options.format)
                    self.formatter.flush()
        except httpx.RequestError as exc:
            raise TransportError(f"failed to retrieve logs: {exc}") from exc

    async def fetch_task_log(self, task_id: str, file: str, options: RetrievalOptions) -> None:
        """Fetch a bounded range of a task's log file and copy it verbatim.

        The body is written as raw bytes when ``out`` exposes a binary buffer.
        The logging API can't serve task logs as JSON, so ``options.format`` is
        ignored here.
        """
        target = TaskTarget(task_id, file)
        logger.debug("Fetching task logs from %s", target.path())
        try:
            async with self.session.stream(
                target.path(), params=target.params(options), accept=CONTENT_TYPE_TEXT
            ) as response:
                await _raise_for_status(response)
                decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
                async for chunk in response.aiter_bytes():
                    _write_raw(self.out, chunk, decoder)
                    self.formatter.flush()
                _write_raw(self.out, b"", decoder)
                self.formatter.flush()
        except httpx.RequestError as exc:
            raise TransportError(f"failed to retrieve logs: {exc}") from exc

    def subscription_for(
        self, target: RetrievalTarget, options: RetrievalOptions
    ) -> EventSubscription:
        """Create an unopened live subscription for ``target``.

        Passing it to ``follow`` lets another task stop following by calling
        ``unsubscribe()`` on it.
        """
        return EventSubscription(self.session, target.path(), target.params(options))

    async def follow(
        self,
        target: RetrievalTarget,
        options: RetrievalOptions,
        subscription: Optional[EventSubscription] = None,
    ) -> None:
        """Stream new entries for ``target`` and render each one until the stream ends.

        Raises:
            SubscriptionError: If the stream can't be opened or breaks
            DecodeError: If an event payload is not a valid entry
        """
        await self._follow(
            target,
            options,
            lambda entry: self.formatter.render(entry, options.format),
            subscription,
        )

    async def follow_messages(
        self,
        target: RetrievalTarget,
        options: RetrievalOptions,
        subscription: Optional[EventSubscription] = None,
    ) -> None:
        """Stream new entries for ``target``, writing only their raw messages."""
        await self._follow(target, options, self.formatter.render_message, subscription)

    async def _follow(
        self,
        target: RetrievalTarget,
        options: RetrievalOptions,
        handle: Callable[[LogEntry], None],
        subscription: Optional[EventSubscription],
    ) -> None:
        subscription = subscription or self.subscription_for(target, options)
        async with subscription:
            async for event in subscription:
                # Empty events are keep-alives.
                if not event.data:
                    continue
                handle(decode_entry(event.data))
                self.formatter.flush()
        logger.debug("Event stream for %s closed", target.path())
