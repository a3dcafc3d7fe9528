import asyncio
import inspect
import json
import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest


_ASYNCIO_MARK_ATTR = "_cluster_logs_asyncio_marker"


ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))

from cluster_logs.core.session import ClusterSession  # noqa: E402

CLUSTER_URL = "https://cluster.example.com"


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "asyncio: run the marked test using an asyncio event loop",
    )


def pytest_collection_modifyitems(
    session: pytest.Session, config: pytest.Config, items: list[pytest.Item]
) -> None:
    del session  # unused but kept for hook signature compatibility
    has_anyio = config.pluginmanager.hasplugin("anyio")
    for item in items:
        if item.get_closest_marker("asyncio"):
            setattr(item, _ASYNCIO_MARK_ATTR, True)
            if has_anyio:
                item.add_marker(pytest.mark.anyio)


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> object:
    if not getattr(pyfuncitem, _ASYNCIO_MARK_ATTR, False):
        return None
    test_func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_func):
        return None
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        funcargs = {
            name: pyfuncitem.funcargs[name]
            for name in pyfuncitem._fixtureinfo.argnames
        }
        coroutine = test_func(**funcargs)
        loop.run_until_complete(coroutine)
        loop.run_until_complete(loop.shutdown_asyncgens())
    finally:
        asyncio.set_event_loop(None)
        loop.close()
    return True


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def journal_line() -> Callable[..., str]:
    """Build one JSON encoded journal entry as served by the logging API."""

    def _build(
        message: str = "hello",
        priority: Any = "6",
        identifier: str = "dcos-mesos-slave",
        pid: str = "1234",
        realtime: int = 1_500_000_000_123_456,
        **extra_fields: Any,
    ) -> str:
        fields = {
            "MESSAGE": message,
            "PRIORITY": priority,
            "SYSLOG_IDENTIFIER": identifier,
            "_PID": pid,
        }
        fields.update(extra_fields)
        return json.dumps(
            {
                "fields": fields,
                "cursor": "s=abc;i=1",
                "monotonic_timestamp": 42,
                "realtime_timestamp": realtime,
            }
        )

    return _build


@pytest.fixture
def make_session() -> Callable[[Callable[[httpx.Request], Any]], ClusterSession]:
    """Create a session whose requests are answered by ``handler``."""

    def _make(handler: Callable[[httpx.Request], Any]) -> ClusterSession:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return ClusterSession(
            CLUSTER_URL,
            token="secret-token",
            user_agent="cluster-logs-test",
            client=client,
        )

    return _make
