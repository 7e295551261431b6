"""Tests for the HTTP transport."""

import time

import httpx
import pytest
import respx

from opensearch_security_client.context import RequestContext
from opensearch_security_client.exceptions import (
    ConnectionError as ClientConnectionError,
    NetworkError,
    RequestCancelledError,
    TimeoutError as ClientTimeoutError,
)
from opensearch_security_client.request import bind_context, new_request
from opensearch_security_client.transport import BearerAuth, HTTPTransport


ROLE_PATH = "/_plugins/_security/api/roles/readall"


class TestHTTPTransportInit:
    """Tests for transport construction."""

    def test_initialization(self, base_url):
        transport = HTTPTransport(base_url)
        assert transport.base_url == base_url
        assert transport.timeout == 30.0

    def test_trailing_slash_removed(self):
        transport = HTTPTransport("https://localhost:9200/")
        assert transport.base_url == "https://localhost:9200"

    def test_basic_auth_preferred_over_token(self):
        auth = HTTPTransport._build_auth("admin", "admin", "tok")
        assert isinstance(auth, httpx.BasicAuth)

    def test_token_auth(self):
        assert isinstance(HTTPTransport._build_auth(None, None, "tok"), BearerAuth)

    def test_no_auth(self):
        assert HTTPTransport._build_auth(None, None, None) is None

    def test_repr(self, base_url):
        assert base_url in repr(HTTPTransport(base_url))

    @pytest.mark.asyncio
    async def test_context_manager(self, base_url):
        async with HTTPTransport(base_url) as transport:
            assert transport._client is not None
        assert transport._client is None


class TestHTTPTransportPerform:
    """Tests for sending requests through respx-mocked httpx."""

    @pytest.mark.asyncio
    async def test_resolves_path_against_cluster(self, base_url, cluster_mock):
        route = cluster_mock.put(ROLE_PATH).mock(return_value=httpx.Response(200, json={"status": "OK"}))

        async with HTTPTransport(base_url) as transport:
            request = new_request("PUT", ROLE_PATH + "?pretty=true", b"{}")
            response = await transport.perform(request)
            await response.aread()
            await response.aclose()

        sent = route.calls.last.request
        assert str(sent.url) == f"{base_url}{ROLE_PATH}?pretty=true"
        assert sent.headers["Host"] == "localhost:9200"
        assert sent.content == b"{}"
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_base_url_with_path_prefix(self):
        with respx.mock(base_url="https://proxy.example.com/opensearch") as router:
            route = router.delete(ROLE_PATH).mock(return_value=httpx.Response(200))

            async with HTTPTransport("https://proxy.example.com/opensearch") as transport:
                response = await transport.perform(new_request("DELETE", ROLE_PATH))
                await response.aclose()

        assert route.called

    @pytest.mark.asyncio
    async def test_body_is_left_unread(self, base_url, cluster_mock):
        cluster_mock.put(ROLE_PATH).mock(return_value=httpx.Response(201, content=b'{"status":"CREATED"}'))

        async with HTTPTransport(base_url) as transport:
            response = await transport.perform(new_request("PUT", ROLE_PATH))
            assert await response.aread() == b'{"status":"CREATED"}'
            await response.aclose()

    @pytest.mark.asyncio
    async def test_basic_auth_header(self, base_url, cluster_mock):
        route = cluster_mock.put(ROLE_PATH).mock(return_value=httpx.Response(200))

        async with HTTPTransport(base_url, username="admin", password="secret") as transport:
            response = await transport.perform(new_request("PUT", ROLE_PATH))
            await response.aclose()

        assert route.calls.last.request.headers["Authorization"].startswith("Basic ")

    @pytest.mark.asyncio
    async def test_bearer_token_header(self, base_url, cluster_mock):
        route = cluster_mock.put(ROLE_PATH).mock(return_value=httpx.Response(200))

        async with HTTPTransport(base_url, token="abc") as transport:
            response = await transport.perform(new_request("PUT", ROLE_PATH))
            await response.aclose()

        assert route.calls.last.request.headers["Authorization"] == "Bearer abc"

    @pytest.mark.asyncio
    async def test_default_headers_do_not_override_request(self, base_url, cluster_mock):
        route = cluster_mock.put(ROLE_PATH).mock(return_value=httpx.Response(200))

        async with HTTPTransport(base_url, headers={"X-Opaque-Id": "default", "X-Env": "test"}) as transport:
            request = new_request("PUT", ROLE_PATH)
            request.headers["X-Opaque-Id"] = "per-request"
            response = await transport.perform(request)
            await response.aclose()

        sent = route.calls.last.request
        assert sent.headers["X-Opaque-Id"] == "per-request"
        assert sent.headers["X-Env"] == "test"

    @pytest.mark.asyncio
    async def test_error_status_is_returned(self, base_url, cluster_mock):
        cluster_mock.delete(ROLE_PATH).mock(return_value=httpx.Response(404, json={"status": "NOT_FOUND"}))

        async with HTTPTransport(base_url) as transport:
            response = await transport.perform(new_request("DELETE", ROLE_PATH))
            await response.aclose()

        assert response.status_code == 404


class TestHTTPTransportErrors:
    """Tests for transport error translation."""

    @pytest.mark.asyncio
    async def test_connect_error(self, base_url, cluster_mock):
        cluster_mock.put(ROLE_PATH).mock(side_effect=httpx.ConnectError("refused"))

        async with HTTPTransport(base_url) as transport:
            with pytest.raises(ClientConnectionError) as exc_info:
                await transport.perform(new_request("PUT", ROLE_PATH))

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout(self, base_url, cluster_mock):
        cluster_mock.put(ROLE_PATH).mock(side_effect=httpx.ReadTimeout("slow"))

        async with HTTPTransport(base_url) as transport:
            with pytest.raises(ClientTimeoutError):
                await transport.perform(new_request("PUT", ROLE_PATH))

    @pytest.mark.asyncio
    async def test_other_transport_error(self, base_url, cluster_mock):
        cluster_mock.put(ROLE_PATH).mock(side_effect=httpx.RemoteProtocolError("bad frame"))

        async with HTTPTransport(base_url) as transport:
            with pytest.raises(NetworkError):
                await transport.perform(new_request("PUT", ROLE_PATH))

    @pytest.mark.asyncio
    async def test_timeout_is_a_network_error(self, base_url, cluster_mock):
        cluster_mock.put(ROLE_PATH).mock(side_effect=httpx.ConnectTimeout("slow"))

        async with HTTPTransport(base_url) as transport:
            with pytest.raises(NetworkError):
                await transport.perform(new_request("PUT", ROLE_PATH))


class TestHTTPTransportContext:
    """Tests for context deadline and cancellation handling."""

    @pytest.mark.asyncio
    async def test_expired_context_is_not_sent(self, base_url, cluster_mock):
        route = cluster_mock.put(ROLE_PATH).mock(return_value=httpx.Response(200))
        request = new_request("PUT", ROLE_PATH)
        bind_context(request, RequestContext(deadline=time.monotonic() - 1))

        async with HTTPTransport(base_url) as transport:
            with pytest.raises(ClientTimeoutError):
                await transport.perform(request)

        assert not route.called

    @pytest.mark.asyncio
    async def test_cancelled_context_is_not_sent(self, base_url, cluster_mock):
        route = cluster_mock.put(ROLE_PATH).mock(return_value=httpx.Response(200))
        context = RequestContext()
        request = new_request("PUT", ROLE_PATH)
        bind_context(request, context)
        context.cancel()

        async with HTTPTransport(base_url) as transport:
            with pytest.raises(RequestCancelledError):
                await transport.perform(request)

        assert not route.called

    @pytest.mark.asyncio
    async def test_live_context_keeps_its_timeout(self, base_url, cluster_mock):
        cluster_mock.put(ROLE_PATH).mock(return_value=httpx.Response(200))
        request = new_request("PUT", ROLE_PATH)
        bind_context(request, RequestContext(timeout=5))

        async with HTTPTransport(base_url, timeout=60) as transport:
            response = await transport.perform(request)
            await response.aclose()

        assert request.extensions["timeout"]["read"] <= 5

    @pytest.mark.asyncio
    async def test_long_context_is_capped_by_default_timeout(self, base_url, cluster_mock):
        cluster_mock.put(ROLE_PATH).mock(return_value=httpx.Response(200))
        request = new_request("PUT", ROLE_PATH)
        bind_context(request, RequestContext(timeout=3600))

        async with HTTPTransport(base_url, timeout=5.0) as transport:
            response = await transport.perform(request)
            await response.aclose()

        assert all(value == 5.0 for value in request.extensions["timeout"].values())

    @pytest.mark.asyncio
    async def test_default_timeout_applied(self, base_url, cluster_mock):
        cluster_mock.put(ROLE_PATH).mock(return_value=httpx.Response(200))
        request = new_request("PUT", ROLE_PATH)

        async with HTTPTransport(base_url, timeout=12) as transport:
            response = await transport.perform(request)
            await response.aclose()

        assert request.extensions["timeout"]["read"] == 12
