"""Severity codes for runtime-reported errors.

Runtime errors are reported through the :mod:`warnings` machinery. Each
warning category maps onto a :class:`Severity` bit so that a reporting mask
can select which of them an interceptor should capture.
"""

import warnings
from enum import IntFlag


class UserError(UserWarning):
    """Category for errors triggered by application code."""

    pass


class UserNotice(UserWarning):
    """Category for notices triggered by application code."""

    pass


class Severity(IntFlag):
    ERROR = 1
    WARNING = 2
    NOTICE = 4
    DEPRECATED = 8
    RUNTIME = 16
    ALL = ERROR | WARNING | NOTICE | DEPRECATED | RUNTIME


_LABELS = {
    Severity.ERROR: "ERROR",
    Severity.WARNING: "WARNING",
    Severity.NOTICE: "NOTICE",
}

_CATEGORIES: dict[Severity, type[Warning]] = {
    Severity.ERROR: UserError,
    Severity.WARNING: UserWarning,
    Severity.NOTICE: UserNotice,
    Severity.DEPRECATED: DeprecationWarning,
    Severity.RUNTIME: RuntimeWarning,
}


def label_for(code: int) -> str:
    """Return the log label for a severity code.

    Only ERROR, WARNING and NOTICE have their own label; every other code,
    including combinations of bits, is reported as UNKNOWN.
    """
    return _LABELS.get(code, "UNKNOWN")  # type: ignore[call-overload]


def severity_of(category: type[Warning]) -> Severity:
    """Classify a warning category into a severity code."""
    if issubclass(category, UserError):
        return Severity.ERROR
    if issubclass(category, UserNotice):
        return Severity.NOTICE
    if issubclass(category, UserWarning):
        return Severity.WARNING
    if issubclass(category, (DeprecationWarning, PendingDeprecationWarning)):
        return Severity.DEPRECATED
    return Severity.RUNTIME


def trigger_error(message: str, severity: Severity = Severity.NOTICE, stacklevel: int = 2) -> None:
    """Report a runtime error of the given severity.

    Args:
        message: The message to report.
        severity: A single severity bit. Defaults to NOTICE.
        stacklevel: Passed to :func:`warnings.warn`; the default attributes
            the error to the caller.

    Raises:
        ValueError: If ``severity`` is not a single known severity bit.
    """
    category = _CATEGORIES.get(severity)
    if category is None:
        raise ValueError(f"Cannot trigger an error with severity {severity!r}")
    warnings.warn(message, category, stacklevel=stacklevel)
