"""
OpenSearch Security Client Library.

An async HTTP client for the role and role-mapping endpoints of the
OpenSearch security plugin.

Example usage:
    ```python
    from datetime import timedelta

    from opensearch_security_client import SecurityClient, with_body, with_timeout

    async with SecurityClient(url="https://localhost:9200",
                              username="admin", password="admin") as client:
        response = await client.role_mappings.create(
            "readall",
            with_body(b'{"backend_roles": ["readers"]}'),
            with_timeout(timedelta(seconds=30)),
        )
        async with response:
            if response.is_error:
                await response.raise_for_status()
    ```
"""

__version__ = "0.1.0"

# Main client
from opensearch_security_client.client import (
    RoleMappingsClient,
    RolesClient,
    SecurityClient,
)

# Configuration
from opensearch_security_client.config import (
    ClientSettings,
    configure_settings,
    get_settings,
)

# Request pipeline (for advanced usage)
from opensearch_security_client.context import RequestContext
from opensearch_security_client.endpoints import (
    ENDPOINTS,
    ROLE_CREATE,
    ROLE_DELETE,
    ROLE_MAPPING_CREATE,
    ROLE_MAPPING_DELETE,
    Endpoint,
    EndpointDescriptor,
    build_request,
    dispatch,
)
from opensearch_security_client.options import (
    RequestConfig,
    RequestOption,
    with_body,
    with_cluster_manager_timeout,
    with_context,
    with_error_trace,
    with_filter_path,
    with_header,
    with_human,
    with_master_timeout,
    with_opaque_id,
    with_pretty,
    with_timeout,
    with_wait_for_active_shards,
)
from opensearch_security_client.response import Response
from opensearch_security_client.transport import HTTPTransport, Transport

# Exceptions
from opensearch_security_client.exceptions import (
    # Base exception
    SecurityClientError,
    # Request construction
    RequestBuildError,
    # Transport errors
    NetworkError,
    TimeoutError,
    ConnectionError,
    RequestCancelledError,
    # HTTP status errors
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ConflictError,
    RateLimitError,
    ServerError,
    ServiceUnavailableError,
    # Utility
    exception_from_response,
)

__all__ = [
    # Version
    "__version__",
    # Main client
    "SecurityClient",
    "RolesClient",
    "RoleMappingsClient",
    # Configuration
    "ClientSettings",
    "configure_settings",
    "get_settings",
    # Request pipeline
    "RequestContext",
    "ENDPOINTS",
    "ROLE_CREATE",
    "ROLE_DELETE",
    "ROLE_MAPPING_CREATE",
    "ROLE_MAPPING_DELETE",
    "Endpoint",
    "EndpointDescriptor",
    "build_request",
    "dispatch",
    "RequestConfig",
    "RequestOption",
    "with_body",
    "with_cluster_manager_timeout",
    "with_context",
    "with_error_trace",
    "with_filter_path",
    "with_header",
    "with_human",
    "with_master_timeout",
    "with_opaque_id",
    "with_pretty",
    "with_timeout",
    "with_wait_for_active_shards",
    "Response",
    "HTTPTransport",
    "Transport",
    # Exceptions
    "SecurityClientError",
    "RequestBuildError",
    "NetworkError",
    "TimeoutError",
    "ConnectionError",
    "RequestCancelledError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "ServerError",
    "ServiceUnavailableError",
    "exception_from_response",
]
