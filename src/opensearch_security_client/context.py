"""
Cancellation and deadline handle for a single request.

A ``RequestContext`` is attached to a request with ``with_context()``. The
endpoint layer only binds it to the outgoing ``httpx.Request``; observing it
is up to the transport. ``HTTPTransport`` refuses to send once the context
is cancelled or past its deadline, and caps the httpx timeouts at the time
that is left.
"""

import time
from typing import Optional

from opensearch_security_client.exceptions import RequestCancelledError, TimeoutError


class RequestContext:
    """
    Deadline and cancellation state shared between a caller and a transport.

    Args:
        timeout: Seconds from now until the deadline
        deadline: Absolute deadline on the ``time.monotonic()`` clock
    """

    def __init__(
        self,
        *,
        timeout: Optional[float] = None,
        deadline: Optional[float] = None,
    ):
        if timeout is not None and deadline is not None:
            raise ValueError("Pass either timeout or deadline, not both")
        if timeout is not None:
            deadline = time.monotonic() + timeout
        self._deadline = deadline
        self._cancelled = False

    @classmethod
    def with_timeout(cls, seconds: float) -> "RequestContext":
        return cls(timeout=seconds)

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Mark the context as cancelled; pending sends will be refused."""
        self._cancelled = True

    def remaining(self) -> Optional[float]:
        """Seconds left until the deadline, or None when there is none."""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def check(self) -> None:
        """
        Raise if the context can no longer be used for sending.

        Raises:
            RequestCancelledError: If cancel() was called
            TimeoutError: If the deadline has passed
        """
        if self._cancelled:
            raise RequestCancelledError()
        if self.expired:
            raise TimeoutError("Context deadline exceeded")

    def __repr__(self) -> str:
        return f"RequestContext(remaining={self.remaining()!r}, cancelled={self._cancelled})"
