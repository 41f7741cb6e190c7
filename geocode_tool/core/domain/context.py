# geocode_tool/core/domain/context.py

"""Per-call request context carrying a deadline and cancellation state"""

# Standard library imports
from time import monotonic

# Local imports
from geocode_tool.core.domain.errors import ContextCancelledError
from geocode_tool.core.domain.errors import NilContextError


class RequestContext:
    """Deadline and cancellation handle passed to every public operation

    The remaining time bounds each provider HTTP call. Cache file I/O and
    object storage sync are not gated by the context.
    """

    __slots__ = ("timeout", "_deadline", "_cancelled")

    def __init__(self, timeout: float | None = None):
        """Create a context

        Args:
            timeout: Seconds until the deadline, None for no deadline
        """
        self.timeout = timeout
        self._deadline = monotonic() + timeout if timeout is not None else None
        self._cancelled = False

    def cancel(self) -> None:
        """Cancel the context; subsequent checks raise"""
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def remaining(self) -> float | None:
        """Seconds left before the deadline, None when unbounded"""
        if self._deadline is None:
            return None
        return max(self._deadline - monotonic(), 0.0)

    def check(self) -> None:
        """Raise ContextCancelledError if cancelled or past the deadline"""
        if self._cancelled:
            raise ContextCancelledError("context cancelled")
        if self._deadline is not None and monotonic() >= self._deadline:
            raise ContextCancelledError("context deadline exceeded")

    def __enter__(self) -> "RequestContext":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()


def require_context(ctx: RequestContext | None) -> RequestContext:
    """Return ctx or raise NilContextError when it is missing"""
    if ctx is None:
        raise NilContextError()
    return ctx
