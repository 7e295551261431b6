"""
Transports for the OpenSearch security client.

A transport takes a fully built ``httpx.Request`` and returns the raw
``httpx.Response``. The endpoint layer depends only on the ``Transport``
interface; ``HTTPTransport`` is the default implementation built on
``httpx.AsyncClient`` with:
- Cluster URL resolution of path-only requests
- Basic or bearer token authentication
- TLS verification and default timeout configuration
- Context deadline/cancellation checks
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Union
import logging
import ssl

import httpx

from opensearch_security_client.context import RequestContext
from opensearch_security_client.exceptions import (
    ConnectionError as ClientConnectionError,
    NetworkError,
    TimeoutError as ClientTimeoutError,
)

logger = logging.getLogger(__name__)


def _sooner(first: Optional[float], second: Optional[float]) -> Optional[float]:
    # None means no limit.
    if first is None:
        return second
    if second is None:
        return first
    return min(first, second)


class Transport(ABC):
    """Abstract base class for request transports."""

    @abstractmethod
    async def perform(self, request: httpx.Request) -> httpx.Response:
        """
        Send the request and return the response with its body unread.

        Raises:
            NetworkError: Or any other exception describing a transport failure
        """
        ...


class BearerAuth(httpx.Auth):
    """Attach a static bearer token to every request."""

    def __init__(self, token: str):
        self._token = token

    def auth_flow(self, request: httpx.Request):
        request.headers["Authorization"] = f"Bearer {self._token}"
        yield request


class HTTPTransport(Transport):
    """
    Default transport sending requests to one cluster with httpx.

    Responses are streamed: the body is left for the caller to read and
    close. No retries are attempted.
    """

    def __init__(
        self,
        base_url: str,
        *,
        username: Optional[str] = None,
        password: Optional[str] = None,
        token: Optional[str] = None,
        verify: Union[bool, str, ssl.SSLContext] = True,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the transport.

        Args:
            base_url: Cluster URL (e.g., "https://localhost:9200")
            username: Username for basic authentication
            password: Password for basic authentication
            token: Bearer token, used when no username is given
            verify: TLS verification flag, CA bundle path or SSL context
            timeout: Default request timeout in seconds
            headers: Headers sent with every request
            client: Pre-built httpx client to use instead of creating one
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._verify = verify
        self._default_headers = headers or {}
        self._auth = self._build_auth(username, password, token)
        self._client = client

    @staticmethod
    def _build_auth(
        username: Optional[str],
        password: Optional[str],
        token: Optional[str],
    ) -> Optional[httpx.Auth]:
        if username:
            return httpx.BasicAuth(username, password or "")
        if token:
            return BearerAuth(token)
        return None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the underlying httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                auth=self._auth,
                verify=self._verify,
                timeout=httpx.Timeout(self.timeout),
                headers=self._default_headers,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HTTPTransport":
        self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _resolve(self, request: httpx.Request, client: httpx.AsyncClient) -> None:
        """
        Point a path-only request at the cluster and add default headers.

        A timeout bound from a context is capped per phase by the client
        default, so the sooner of the two applies.
        """
        if not request.url.is_absolute_url:
            base = client.base_url
            request.url = base.copy_with(
                raw_path=base.raw_path.rstrip(b"/") + request.url.raw_path
            )
            request.headers["Host"] = request.url.netloc.decode("ascii")
        for key, value in client.headers.items():
            if key not in request.headers:
                request.headers[key] = value
        default = client.timeout.as_dict()
        bound = request.extensions.get("timeout")
        if bound is None:
            request.extensions["timeout"] = default
        else:
            request.extensions["timeout"] = {
                key: _sooner(bound.get(key), value) for key, value in default.items()
            }

    async def perform(self, request: httpx.Request) -> httpx.Response:
        """
        Send the request to the cluster.

        Raises:
            RequestCancelledError: If the bound context was cancelled
            TimeoutError: On request timeout or an expired context
            ConnectionError: On connection failures
            NetworkError: On any other transport failure
        """
        context = request.extensions.get("context")
        if isinstance(context, RequestContext):
            context.check()

        client = self._get_client()
        self._resolve(request, client)

        try:
            response = await client.send(request, stream=True)
        except httpx.TimeoutException as e:
            raise ClientTimeoutError(f"Request timed out: {e}") from e
        except httpx.ConnectError as e:
            raise ClientConnectionError(f"Connection failed: {e}") from e
        except httpx.TransportError as e:
            raise NetworkError(f"Request failed: {e}") from e

        logger.debug(
            "%s %s completed with %s", request.method, request.url.path, response.status_code
        )
        return response

    def __repr__(self) -> str:
        return f"HTTPTransport(base_url={self.base_url!r})"
