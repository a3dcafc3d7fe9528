"""Helpers shared by CLI commands."""

import asyncio
import functools
import logging
import sys
from typing import IO, Any, Awaitable, Callable, Optional, TypeVar

import typer

from ..config.settings import settings
from ..core.session import ClusterSession
from ..logs import LogsClient, LogsError, NoLogsFound
from ..utils.ux import print_error, print_warning
from .exceptions import CLIError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def run_async(coro: Awaitable[Any]) -> Any:
    """Run a coroutine to completion from a synchronous command."""
    return asyncio.run(coro)


async def run_with_client(
    action: Callable[[LogsClient], Awaitable[None]],
    out: Optional[IO[str]] = None,
) -> None:
    """Open a session from settings and run ``action`` with a logs client."""
    async with ClusterSession.from_settings(settings) as session:
        client = LogsClient(session, out or sys.stdout)
        await action(client)


def handle_logs_errors(func: F) -> F:
    """Translate logs errors into user-facing messages and exit codes."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except NoLogsFound as e:
            print_warning(str(e))
            raise typer.Exit(0)
        except LogsError as e:
            print_error(str(e))
            if e.detail:
                logger.debug("Error detail: %s", e.detail)
            raise typer.Exit(1)
        except CLIError as e:
            print_error(e.message, log=False)
            raise typer.Exit(e.exit_code)
        except KeyboardInterrupt:
            raise typer.Exit(0)

    return wrapper  # type: ignore[return-value]
