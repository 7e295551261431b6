"""
Per-call request configuration and the option functions that mutate it.

Every endpoint call starts from a fresh ``RequestConfig`` holding only the
role name. Options are plain callables applied in the order they were
passed; a later option writing the same field wins.

Example:
    ```python
    await client.roles.create(
        "readall",
        with_body(b'{"cluster_permissions": ["cluster_composite_ops_ro"]}'),
        with_timeout(timedelta(seconds=30)),
        with_opaque_id("audit-42"),
    )
    ```
"""

import warnings
from datetime import timedelta
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field

from opensearch_security_client.context import RequestContext
from opensearch_security_client.request import HEADER_OPAQUE_ID, append_headers


class RequestConfig(BaseModel):
    """
    Mutable configuration for one endpoint call.

    Numeric timeouts assigned to the duration fields are read as seconds.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    role: str
    body: Optional[Any] = None

    master_timeout: Optional[timedelta] = None
    cluster_manager_timeout: Optional[timedelta] = None
    timeout: Optional[timedelta] = None
    wait_for_active_shards: Union[int, str] = ""

    pretty: bool = False
    human: bool = False
    error_trace: bool = False
    filter_path: List[str] = Field(default_factory=list)

    headers: Optional[httpx.Headers] = None
    context: Optional[RequestContext] = None


RequestOption = Callable[[RequestConfig], None]


def apply_options(config: RequestConfig, options: Iterable[RequestOption]) -> RequestConfig:
    """Apply options to the configuration in call order."""
    for option in options:
        option(config)
    return config


def with_context(context: RequestContext) -> RequestOption:
    """Set the cancellation/deadline handle for the request."""

    def apply(config: RequestConfig) -> None:
        config.context = context

    return apply


def with_body(body: Any) -> RequestOption:
    """
    Set the request body (role or role-mapping definition as JSON).

    File-like bodies are read synchronously when the request is built, which
    blocks the event loop; pass bytes or an async iterable for large payloads.
    """

    def apply(config: RequestConfig) -> None:
        config.body = body

    return apply


def with_master_timeout(value: timedelta) -> RequestOption:
    """
    Explicit operation timeout for connection to the cluster-manager node.

    Deprecated: use with_cluster_manager_timeout() instead.
    """
    warnings.warn(
        "with_master_timeout is deprecated, use with_cluster_manager_timeout",
        DeprecationWarning,
        stacklevel=2,
    )

    def apply(config: RequestConfig) -> None:
        config.master_timeout = value

    return apply


def with_cluster_manager_timeout(value: timedelta) -> RequestOption:
    """Explicit operation timeout for connection to the cluster-manager node."""

    def apply(config: RequestConfig) -> None:
        config.cluster_manager_timeout = value

    return apply


def with_timeout(value: timedelta) -> RequestOption:
    """Explicit operation timeout."""

    def apply(config: RequestConfig) -> None:
        config.timeout = value

    return apply


def with_wait_for_active_shards(value: Union[int, str]) -> RequestOption:
    """Active shard count (or "all") to wait for before the operation returns."""

    def apply(config: RequestConfig) -> None:
        config.wait_for_active_shards = value

    return apply


def with_pretty() -> RequestOption:
    """Pretty-print the response body."""

    def apply(config: RequestConfig) -> None:
        config.pretty = True

    return apply


def with_human() -> RequestOption:
    """Return statistical values in human-readable form."""

    def apply(config: RequestConfig) -> None:
        config.human = True

    return apply


def with_error_trace() -> RequestOption:
    """Include the stack trace of errors in the response body."""

    def apply(config: RequestConfig) -> None:
        config.error_trace = True

    return apply


def with_filter_path(*paths: str) -> RequestOption:
    """Filter the properties of the response body."""

    def apply(config: RequestConfig) -> None:
        config.filter_path = list(paths)

    return apply


def with_header(headers: Mapping[str, str]) -> RequestOption:
    """Add headers to the request, keeping values added earlier."""

    def apply(config: RequestConfig) -> None:
        config.headers = append_headers(config.headers, headers)

    return apply


def with_opaque_id(value: str) -> RequestOption:
    """Set the X-Opaque-Id header used to trace the request on the cluster."""

    def apply(config: RequestConfig) -> None:
        headers = config.headers if config.headers is not None else httpx.Headers()
        headers[HEADER_OPAQUE_ID] = value
        config.headers = headers

    return apply


class OptionSetters:
    """Exposes the option functions as attributes of an endpoint."""

    with_context = staticmethod(with_context)
    with_body = staticmethod(with_body)
    with_master_timeout = staticmethod(with_master_timeout)
    with_cluster_manager_timeout = staticmethod(with_cluster_manager_timeout)
    with_timeout = staticmethod(with_timeout)
    with_wait_for_active_shards = staticmethod(with_wait_for_active_shards)
    with_pretty = staticmethod(with_pretty)
    with_human = staticmethod(with_human)
    with_error_trace = staticmethod(with_error_trace)
    with_filter_path = staticmethod(with_filter_path)
    with_header = staticmethod(with_header)
    with_opaque_id = staticmethod(with_opaque_id)
