"""Pytest configuration and fixtures for opensearch-security-client tests."""

import pytest
import httpx
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock

from opensearch_security_client.transport import Transport


# ============================================================================
# Mock HTTP Responses
# ============================================================================


def create_mock_response(
    status_code: int = 200,
    json_data: Optional[Any] = None,
    content: bytes = b"",
    headers: Optional[Dict[str, str]] = None,
    request: Optional[httpx.Request] = None,
) -> httpx.Response:
    """Create a real httpx.Response with an in-memory body."""
    if json_data is not None:
        return httpx.Response(status_code, json=json_data, headers=headers, request=request)
    return httpx.Response(status_code, content=content, headers=headers, request=request)


def create_stream_response(
    status_code: int = 200,
    content: bytes = b"",
    headers: Optional[Dict[str, str]] = None,
) -> httpx.Response:
    """Create an httpx.Response whose body has not been read yet."""
    return httpx.Response(status_code, headers=headers, stream=httpx.ByteStream(content))


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def base_url():
    """Default cluster URL for testing."""
    return "https://localhost:9200"


@pytest.fixture
def mock_transport():
    """Create a mock transport returning a 200 OK response."""
    transport = AsyncMock(spec=Transport)
    transport.perform.return_value = create_mock_response(
        200, json_data={"status": "OK", "message": "'readall' updated."}
    )
    return transport


@pytest.fixture
def sent_request(mock_transport):
    """Return a helper giving the request passed to the mock transport."""

    def _sent() -> httpx.Request:
        mock_transport.perform.assert_awaited_once()
        return mock_transport.perform.await_args.args[0]

    return _sent


@pytest.fixture
def mock_not_found_response():
    """Mock security plugin 404 body."""
    return {"status": "NOT_FOUND", "message": "role readall not found."}


@pytest.fixture
def mock_error_response():
    """Mock core OpenSearch error body."""
    return {
        "error": {
            "root_cause": [{"type": "security_exception", "reason": "no permissions"}],
            "type": "security_exception",
            "reason": "no permissions for [cluster:admin/opendistro/security/roles]",
        },
        "status": 403,
    }


# ============================================================================
# respx Fixtures
# ============================================================================


@pytest.fixture
def cluster_mock(base_url):
    """Create a respx router mocking the cluster URL."""
    import respx

    with respx.mock(base_url=base_url, assert_all_called=False) as router:
        yield router
