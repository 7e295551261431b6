"""
Configuration settings for the OpenSearch security client.
"""

from functools import lru_cache
from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """
    Connection settings for the security API.

    Settings are loaded from environment variables with OPENSEARCH_ prefix.
    Example: OPENSEARCH_URL, OPENSEARCH_USERNAME, OPENSEARCH_VERIFY_CERTS.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(
        default="https://localhost:9200",
        description="Cluster URL"
    )

    # Basic auth takes precedence over the token when both are set
    username: Optional[str] = Field(
        default=None,
        description="Username for basic authentication"
    )
    password: Optional[str] = Field(
        default=None,
        description="Password for basic authentication"
    )
    token: Optional[str] = Field(
        default=None,
        description="Bearer token for token authentication"
    )

    verify_certs: bool = Field(
        default=True,
        description="Whether to verify the cluster's TLS certificate"
    )
    ca_certs: Optional[str] = Field(
        default=None,
        description="Path to a CA bundle used for verification"
    )

    timeout: float = Field(
        default=30.0,
        description="HTTP request timeout in seconds"
    )
    headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Headers sent with every request"
    )


@lru_cache
def get_settings() -> ClientSettings:
    """
    Get client settings singleton.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return ClientSettings()


def configure_settings(
    url: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    token: Optional[str] = None,
    **kwargs,
) -> ClientSettings:
    """
    Configure client settings programmatically.

    Explicit values override environment variables; None values are
    ignored so the environment (or the default) still applies.

    Returns:
        Configured ClientSettings instance
    """
    settings_dict = {
        k: v for k, v in {
            "url": url,
            "username": username,
            "password": password,
            "token": token,
            **kwargs,
        }.items() if v is not None
    }
    return ClientSettings(**settings_dict)
