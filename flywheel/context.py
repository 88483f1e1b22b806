import contextvars
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field, replace

from ulid import ULID


def _process_environ() -> Mapping[str, str]:
    return os.environ


@dataclass(frozen=True)
class RequestContext:
    """Immutable view of the request an application is serving.

    The context carries the request's environment variables (CGI/WSGI style
    keys such as ``REMOTE_ADDR`` or ``SCRIPT_FILENAME``) and an identifier used
    to tie log records back to a single request.

    Attributes:
        environ: Request environment. Defaults to the process environment,
            which is what console applications see.
        request_id: Unique ID of the request, if one has been assigned.

    Examples:
        Create a context at the entry point of a request:

        >>> ctx = RequestContext.create({"REMOTE_ADDR": "10.0.0.1"})
        >>> ctx.environ["REMOTE_ADDR"]
        '10.0.0.1'

        Run code with the context active:

        >>> with scoped_context(ctx):
        ...     app.execute()
    """

    environ: Mapping[str, str] = field(default_factory=_process_environ)
    request_id: ULID | None = None

    @classmethod
    def create(
        cls,
        environ: Mapping[str, str] | None = None,
        request_id: ULID | None = None,
    ) -> "RequestContext":
        """Create a new context, typically at a request entry point.

        Args:
            environ: Request environment. The process environment is used
                when omitted.
            request_id: Optional request ID. A new ULID is generated when
                not provided.

        Returns:
            A new RequestContext instance.
        """
        return cls(
            environ=_process_environ() if environ is None else dict(environ),
            request_id=request_id or ULID(),
        )

    def with_environ(self, environ: Mapping[str, str]) -> "RequestContext":
        """Create a copy of this context with a different environment."""
        return replace(self, environ=dict(environ))


_context: contextvars.ContextVar[RequestContext | None] = contextvars.ContextVar(
    "request_context", default=None
)


def get_context() -> RequestContext:
    """Get the current request context.

    If no context has been set, returns a context over the process
    environment with no request ID.
    """
    ctx = _context.get()
    if ctx is None:
        return RequestContext()
    return ctx


def set_context(context: RequestContext) -> None:
    """Set the current request context."""
    _context.set(context)


def clear_context() -> None:
    """Clear the current request context.

    This is useful for cleanup or testing.
    """
    _context.set(None)


@contextmanager
def scoped_context(context: RequestContext) -> Iterator[RequestContext]:
    """Make ``context`` current for the duration of a ``with`` block.

    The previous context is restored on exit, even if the block raises.
    """
    token = _context.set(context)
    try:
        yield context
    finally:
        _context.reset(token)
