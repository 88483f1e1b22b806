from collections.abc import Mapping

from ..context import get_context

# Probed in order; the first non-empty value wins.
CLIENT_ADDRESS_KEYS = (
    "HTTP_CLIENT_IP",
    "HTTP_X_FORWARDED_FOR",
    "HTTP_X_FORWARDED",
    "HTTP_FORWARDED_FOR",
    "HTTP_FORWARDED",
    "REMOTE_ADDR",
)

UNKNOWN_CLIENT = "UNKNOWN"


def resolve_client_address(environ: Mapping[str, str] | None = None) -> str:
    """Return the network address of the client being served.

    The value is taken verbatim from the request environment and is not
    validated. Treat it as untrusted input.

    Args:
        environ: Environment to probe. Defaults to the environment of the
            current request context.

    Returns:
        The first non-empty address found, or ``"UNKNOWN"``.
    """
    if environ is None:
        environ = get_context().environ

    for key in CLIENT_ADDRESS_KEYS:
        value = environ.get(key)
        if value:
            return value
    return UNKNOWN_CLIENT
