"""
Normalized response returned by every endpoint call.
"""

import json
from typing import Any, List, Optional

import httpx

from opensearch_security_client.exceptions import (
    RateLimitError,
    exception_from_response,
)


class Response:
    """
    Status, headers and the live body of a transport response.

    The body is handed over unread; the caller owns it and must close it,
    either with ``aclose()`` or by using the response as an async context
    manager. An HTTP error status is not an exception here; check
    ``is_error`` or call ``raise_for_status()``.
    """

    def __init__(
        self,
        status_code: int,
        headers: httpx.Headers,
        body: Optional[httpx.Response] = None,
    ):
        self.status_code = status_code
        self.headers = headers
        self.body = body

    @classmethod
    def from_transport(cls, raw: httpx.Response) -> "Response":
        return cls(status_code=raw.status_code, headers=raw.headers, body=raw)

    @property
    def is_error(self) -> bool:
        return self.status_code > 299

    @property
    def warnings(self) -> List[str]:
        """Values of the ``Warning`` response header, e.g. deprecation notices."""
        return self.headers.get_list("Warning")

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    async def read(self) -> bytes:
        """Read the whole body. Returns b"" when there is none."""
        if self.body is None:
            return b""
        return await self.body.aread()

    async def text(self) -> str:
        if self.body is None:
            return ""
        await self.body.aread()
        return self.body.text

    async def json(self) -> Any:
        return json.loads(await self.read())

    async def aclose(self) -> None:
        if self.body is not None:
            await self.body.aclose()

    async def __aenter__(self) -> "Response":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def raise_for_status(self) -> None:
        """
        Raise the matching SecurityClientError for an error status.

        The body is read to extract the error reason. Successful responses
        are left untouched.
        """
        if not self.is_error:
            return

        raw = await self.read()
        error_type = None
        details = {}
        try:
            data = json.loads(raw)
        except ValueError:
            message = raw.decode("utf-8", errors="replace") or f"HTTP {self.status_code}"
        else:
            message, error_type, details = _parse_error_body(data, self.status_code)

        error = exception_from_response(
            self.status_code,
            message,
            error_type=error_type,
            details=details,
        )
        if isinstance(error, RateLimitError):
            retry_after = self.headers.get("Retry-After")
            error.retry_after = int(retry_after) if retry_after and retry_after.isdigit() else None
        raise error

    def __repr__(self) -> str:
        return f"Response(status_code={self.status_code})"


def _parse_error_body(data: Any, status_code: int):
    # Security plugin errors look like {"status": "NOT_FOUND", "message": "..."};
    # core errors like {"error": {"type": ..., "reason": ...}, "status": 404}.
    if not isinstance(data, dict):
        return str(data), None, {}
    error = data.get("error")
    if isinstance(error, dict):
        message = error.get("reason") or str(error)
        return message, error.get("type"), data
    if isinstance(error, str):
        return error, None, data
    message = data.get("message") or f"HTTP {status_code}"
    status = data.get("status")
    return message, status if isinstance(status, str) else None, data
