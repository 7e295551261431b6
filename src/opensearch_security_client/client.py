"""
Main security API client.

This module provides the SecurityClient class, the primary entry point for
managing roles and role mappings through the OpenSearch security plugin.
"""

from typing import Optional
import ssl
import logging

from opensearch_security_client.config import ClientSettings, get_settings
from opensearch_security_client.endpoints import (
    ROLE_CREATE,
    ROLE_DELETE,
    ROLE_MAPPING_CREATE,
    ROLE_MAPPING_DELETE,
    Endpoint,
)
from opensearch_security_client.transport import HTTPTransport, Transport

logger = logging.getLogger(__name__)


class RolesClient:
    """
    Client for ``/_plugins/_security/api/roles`` endpoints.

    Attributes:
        create: Create or replace a role (PUT)
        delete: Delete a role (DELETE)
    """

    def __init__(self, transport: Transport) -> None:
        self.create = Endpoint(ROLE_CREATE, transport)
        self.delete = Endpoint(ROLE_DELETE, transport)


class RoleMappingsClient:
    """
    Client for ``/_plugins/_security/api/rolesmapping`` endpoints.

    Attributes:
        create: Create or replace the mapping of a role (PUT)
        delete: Delete the mapping of a role (DELETE)
    """

    def __init__(self, transport: Transport) -> None:
        self.create = Endpoint(ROLE_MAPPING_CREATE, transport)
        self.delete = Endpoint(ROLE_MAPPING_DELETE, transport)


class SecurityClient:
    """
    Client for the OpenSearch security plugin REST API.

    Example usage:
        ```python
        async with SecurityClient(url="https://localhost:9200",
                                  username="admin", password="admin") as client:
            response = await client.roles.create(
                "readall",
                with_body(b'{"cluster_permissions": ["cluster_composite_ops_ro"]}'),
            )
            async with response:
                print(response.status_code, await response.json())
        ```

    Or with a custom transport:
        ```python
        client = SecurityClient(transport=my_transport)
        await client.role_mappings.delete("readall")
        ```
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        *,
        settings: Optional[ClientSettings] = None,
        **overrides,
    ):
        """
        Initialize the security client.

        Args:
            transport: Transport to send requests through. When omitted an
                HTTPTransport is built from the settings.
            settings: Connection settings; loaded from the environment if not given
            **overrides: Individual ClientSettings fields overriding ``settings``
        """
        self._owns_transport = transport is None
        if transport is None:
            settings = settings or get_settings()
            if overrides:
                settings = settings.model_copy(update=overrides)
            transport = self._transport_from_settings(settings)
        self._transport = transport

        self.roles = RolesClient(transport)
        self.role_mappings = RoleMappingsClient(transport)

    @staticmethod
    def _transport_from_settings(settings: ClientSettings) -> HTTPTransport:
        verify = settings.verify_certs
        if settings.verify_certs and settings.ca_certs:
            verify = ssl.create_default_context(cafile=settings.ca_certs)
        logger.debug("Creating HTTP transport for %s", settings.url)
        return HTTPTransport(
            settings.url,
            username=settings.username,
            password=settings.password,
            token=settings.token,
            verify=verify,
            timeout=settings.timeout,
            headers=settings.headers,
        )

    @property
    def transport(self) -> Transport:
        """Get the transport for custom requests."""
        return self._transport

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and isinstance(self._transport, HTTPTransport):
            await self._transport.close()

    async def __aenter__(self) -> "SecurityClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"SecurityClient(transport={self._transport!r})"
