"""
Helpers for turning a request configuration into an ``httpx.Request``.

Requests are built with a path-only URL; the transport resolves it
against the cluster URL when it sends.
"""

from datetime import timedelta
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from opensearch_security_client.context import RequestContext
from opensearch_security_client.exceptions import RequestBuildError

HEADER_CONTENT_TYPE = "Content-Type"
HEADER_OPAQUE_ID = "X-Opaque-Id"
JSON_CONTENT_TYPE = "application/json"

HeadersInput = Union[httpx.Headers, Mapping[str, str]]


def format_duration(value: timedelta) -> str:
    """
    Format a duration in the cluster's time-unit grammar.

    Sub-millisecond values are sent in nanoseconds, everything else in
    whole milliseconds (``timedelta(seconds=5)`` -> ``"5000ms"``).
    """
    nanos = ((value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds) * 1000
    if nanos < 1_000_000:
        return f"{nanos}nanos"
    return f"{nanos // 1_000_000}ms"


def _read_body(body: Any) -> Any:
    # File-like objects are drained here; an AsyncClient cannot stream a sync reader.
    if body is not None and not isinstance(body, (bytes, str)) and hasattr(body, "read"):
        return body.read()
    return body


def new_request(method: str, path: str, body: Any = None) -> httpx.Request:
    """
    Build the base request for one call.

    Args:
        method: HTTP method
        path: Request path, used verbatim
        body: Opaque request body (bytes, str, file-like or async iterable)

    Returns:
        A path-only ``httpx.Request``

    Raises:
        RequestBuildError: If httpx rejects the method, path or body
    """
    try:
        return httpx.Request(method, path, content=_read_body(body))
    except (TypeError, ValueError, httpx.InvalidURL) as e:
        raise RequestBuildError(
            f"Failed to build {method} {path}: {e}",
            details={"method": method, "path": path},
        ) from e


def encode_params(request: httpx.Request, params: Dict[str, str]) -> None:
    """Merge query parameters into the request URL, replacing on key collision."""
    request.url = request.url.copy_merge_params(params)


def append_headers(base: Optional[httpx.Headers], extra: HeadersInput) -> httpx.Headers:
    """Return a header set with every value of ``extra`` appended to ``base``."""
    items = list(base.multi_items()) if base is not None else []
    if isinstance(extra, httpx.Headers):
        items.extend(extra.multi_items())
    else:
        items.extend(extra.items())
    return httpx.Headers(items)


def merge_headers(request: httpx.Request, headers: httpx.Headers) -> None:
    """
    Merge caller headers into the request.

    An empty request header set is replaced wholesale; otherwise each caller
    value is added next to what is already there.
    """
    if not request.headers:
        request.headers = httpx.Headers(headers)
    else:
        request.headers = append_headers(request.headers, headers)


def bind_context(request: httpx.Request, context: RequestContext) -> None:
    """Attach a context to the request so the transport can observe it."""
    request.extensions["context"] = context
    remaining = context.remaining()
    if remaining is not None:
        request.extensions["timeout"] = httpx.Timeout(remaining).as_dict()
