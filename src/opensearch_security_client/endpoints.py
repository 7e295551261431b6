"""
Endpoint table and the generic build/dispatch pipeline.

All security API operations share one request pipeline. What differs per
operation (method, path prefix, whether a body is sent, which query
parameters are serialized) lives in an ``EndpointDescriptor``.
"""

import logging
from typing import Dict, FrozenSet, Literal

import httpx
from pydantic import BaseModel, ConfigDict

from opensearch_security_client.options import (
    OptionSetters,
    RequestConfig,
    RequestOption,
    apply_options,
)
from opensearch_security_client.request import (
    HEADER_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    bind_context,
    encode_params,
    format_duration,
    merge_headers,
    new_request,
)
from opensearch_security_client.response import Response
from opensearch_security_client.transport import Transport

logger = logging.getLogger(__name__)

ROLES_PATH = "/_plugins/_security/api/roles/"
ROLES_MAPPING_PATH = "/_plugins/_security/api/rolesmapping/"

COMMON_PARAMS: FrozenSet[str] = frozenset(
    {
        "master_timeout",
        "cluster_manager_timeout",
        "timeout",
        "wait_for_active_shards",
        "pretty",
        "human",
        "error_trace",
        "filter_path",
    }
)


class EndpointDescriptor(BaseModel):
    """Static description of one API operation."""

    model_config = ConfigDict(frozen=True)

    name: str
    method: Literal["PUT", "DELETE", "GET", "POST"]
    path_prefix: str
    accepts_body: bool = False
    params: FrozenSet[str] = frozenset()

    def path_for(self, role: str) -> str:
        return self.path_prefix + role


# Delete operations send neither a body nor query parameters, even though
# the corresponding options can be applied to them.
ROLE_CREATE = EndpointDescriptor(
    name="role.create",
    method="PUT",
    path_prefix=ROLES_PATH,
    accepts_body=True,
    params=COMMON_PARAMS,
)
ROLE_DELETE = EndpointDescriptor(
    name="role.delete",
    method="DELETE",
    path_prefix=ROLES_PATH,
)
ROLE_MAPPING_CREATE = EndpointDescriptor(
    name="role_mapping.create",
    method="PUT",
    path_prefix=ROLES_MAPPING_PATH,
    accepts_body=True,
    params=COMMON_PARAMS,
)
ROLE_MAPPING_DELETE = EndpointDescriptor(
    name="role_mapping.delete",
    method="DELETE",
    path_prefix=ROLES_MAPPING_PATH,
)

ENDPOINTS: Dict[str, EndpointDescriptor] = {
    descriptor.name: descriptor
    for descriptor in (ROLE_CREATE, ROLE_DELETE, ROLE_MAPPING_CREATE, ROLE_MAPPING_DELETE)
}


def collect_params(descriptor: EndpointDescriptor, config: RequestConfig) -> Dict[str, str]:
    """Serialize the non-default query options the endpoint recognizes."""
    params: Dict[str, str] = {}
    recognized = descriptor.params

    if "master_timeout" in recognized and config.master_timeout:
        params["master_timeout"] = format_duration(config.master_timeout)
    if "cluster_manager_timeout" in recognized and config.cluster_manager_timeout:
        params["cluster_manager_timeout"] = format_duration(config.cluster_manager_timeout)
    if "timeout" in recognized and config.timeout:
        params["timeout"] = format_duration(config.timeout)
    if "wait_for_active_shards" in recognized and config.wait_for_active_shards:
        params["wait_for_active_shards"] = str(config.wait_for_active_shards)
    if "pretty" in recognized and config.pretty:
        params["pretty"] = "true"
    if "human" in recognized and config.human:
        params["human"] = "true"
    if "error_trace" in recognized and config.error_trace:
        params["error_trace"] = "true"
    if "filter_path" in recognized and config.filter_path:
        params["filter_path"] = ",".join(config.filter_path)

    return params


def build_request(descriptor: EndpointDescriptor, config: RequestConfig) -> httpx.Request:
    """
    Turn a completed configuration into the request to send.

    Raises:
        RequestBuildError: If the request cannot be constructed
    """
    body = config.body if descriptor.accepts_body else None

    request = new_request(descriptor.method, descriptor.path_for(config.role), body)

    params = collect_params(descriptor, config)
    if params:
        encode_params(request, params)

    # Any body is assumed to be JSON.
    if body is not None:
        request.headers[HEADER_CONTENT_TYPE] = JSON_CONTENT_TYPE

    if config.headers:
        merge_headers(request, config.headers)

    if config.context is not None:
        bind_context(request, config.context)

    return request


async def dispatch(
    descriptor: EndpointDescriptor,
    config: RequestConfig,
    transport: Transport,
) -> Response:
    """
    Build the request, send it through the transport and wrap the result.

    Transport exceptions propagate unchanged. HTTP error statuses do not
    raise; they are returned like any other response.
    """
    request = build_request(descriptor, config)
    logger.debug("%s %s", request.method, request.url)

    raw = await transport.perform(request)

    logger.debug("%s %s -> %s", request.method, request.url, raw.status_code)
    return Response.from_transport(raw)


class Endpoint(OptionSetters):
    """
    Callable bound to one operation and one transport.

    ``await endpoint(role, *options)`` builds a fresh configuration for the
    role, applies the options in order and dispatches it.
    """

    def __init__(self, descriptor: EndpointDescriptor, transport: Transport):
        self._descriptor = descriptor
        self._transport = transport

    @property
    def descriptor(self) -> EndpointDescriptor:
        return self._descriptor

    def configure(self, role: str, *options: RequestOption) -> RequestConfig:
        return apply_options(RequestConfig(role=role), options)

    async def __call__(self, role: str, *options: RequestOption) -> Response:
        config = self.configure(role, *options)
        return await dispatch(self._descriptor, config, self._transport)

    def __repr__(self) -> str:
        return f"Endpoint({self._descriptor.method} {self._descriptor.path_prefix}{{role}})"
