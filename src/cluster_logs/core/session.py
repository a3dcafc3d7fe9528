"""HTTP session for talking to the cluster's logging API."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional, Sequence, Tuple, Union

import httpx
from opentelemetry import trace
from opentelemetry.propagate import inject

from .constants import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

QueryParams = Sequence[Tuple[str, str]]
TimeoutTypes = Union[float, httpx.Timeout, None]


class ClusterSession:
    """Shared HTTP client, base URL and auth headers for one cluster.

    The underlying ``httpx.AsyncClient`` pools connections and can be used by
    concurrent requests and event streams.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the session.

        Args:
            base_url: The cluster URL (e.g., https://cluster.example.com)
            token: ACS token sent as ``Authorization: token=<token>``
            user_agent: Value of the ``User-Agent`` header
            timeout: Timeout in seconds for bounded requests
            client: Optional client to use instead of creating one
        """
        self.base_url = base_url.rstrip(
            "/"
        )  # Remove trailing slash for consistent URL building
        self.token = token
        self.user_agent = user_agent
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
        )
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    def from_settings(cls, settings) -> "ClusterSession":
        return cls(
            base_url=settings.CLUSTER_URL,
            token=settings.ACS_TOKEN,
            user_agent=settings.USER_AGENT,
            timeout=settings.TIMEOUT,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def headers(self, accept: Optional[str] = None) -> Dict[str, str]:
        headers = {"User-Agent": self.user_agent}
        if self.token:
            headers["Authorization"] = f"token={self.token}"
        if accept:
            headers["Accept"] = accept

        # Inject OpenTelemetry trace context headers
        inject(headers)
        return headers

    def _span_attributes(self, path: str) -> Dict[str, str]:
        return {"http.method": "GET", "http.url": self.url(path)}

    @asynccontextmanager
    async def stream(
        self,
        path: str,
        *,
        params: Optional[QueryParams] = None,
        accept: Optional[str] = None,
        timeout: TimeoutTypes = None,
    ) -> AsyncIterator[httpx.Response]:
        """Issue a GET request and yield the response with its body unread."""
        with self.tracer.start_as_current_span(
            f"logs.get.{path.strip('/').replace('/', '.')}",
            attributes=self._span_attributes(path),
        ) as span:
            async with self._client.stream(
                "GET",
                self.url(path),
                params=params,
                headers=self.headers(accept),
                timeout=timeout if timeout is not None else self.timeout,
            ) as response:
                span.set_attribute("http.status_code", response.status_code)
                yield response

    async def open_stream(
        self,
        path: str,
        *,
        params: Optional[QueryParams] = None,
        accept: Optional[str] = None,
        timeout: TimeoutTypes = None,
    ) -> httpx.Response:
        """Send a GET request and return the streaming response.

        The caller owns the response and must close it with ``aclose()``.
        """
        with self.tracer.start_as_current_span(
            f"logs.subscribe.{path.strip('/').replace('/', '.')}",
            attributes=self._span_attributes(path),
        ) as span:
            request = self._client.build_request(
                "GET",
                self.url(path),
                params=params,
                headers=self.headers(accept),
                timeout=timeout if timeout is not None else self.timeout,
            )
            response = await self._client.send(request, stream=True)
            span.set_attribute("http.status_code", response.status_code)
            return response

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ClusterSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
