"""Interception and logging of runtime-reported errors.

The interceptor takes over :func:`warnings.showwarning` while installed. When
a reported error matches its severity mask it uninstalls itself, captures the
call stack and writes one formatted record to its log sink. It is not
re-installed afterwards, so a failure while handling an error falls back to
the previous hook instead of recursing.

Warnings outside the mask, and warnings reaching a hook that has already
fired, are passed on to the hook that was active before installation.
"""

import inspect
import logging
import threading
import warnings
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime
from itertools import islice
from types import FrameType, TracebackType
from typing import TYPE_CHECKING, Any, Protocol, TextIO

from ..context import get_context
from ..severity import Severity, label_for, severity_of, trigger_error
from .client import resolve_client_address

if TYPE_CHECKING:
    from ..settings import ApplicationSettings

LOGGER = logging.getLogger(__name__)

# English abbreviations regardless of the process locale
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

DEFAULT_TRACE_DEPTH = 8

# Frames from these modules are never part of a captured stack
_SKIPPED_MODULES = frozenset({__name__, trigger_error.__module__, "warnings", "_py_warnings"})


@dataclass(frozen=True)
class StackFrame:
    """One entry of a captured call stack."""

    file: str = "unknown"
    line: int = 0
    function: str = "unknown"
    owner: str | None = None

    @classmethod
    def from_frame(cls, frame: FrameType) -> "StackFrame":
        code = frame.f_code
        receiver = frame.f_locals.get("self")
        return cls(
            file=code.co_filename or "unknown",
            line=frame.f_lineno or 0,
            function=code.co_name or "unknown",
            owner=type(receiver).__name__ if receiver is not None else None,
        )

    def format(self) -> str:
        qualifier = f"{self.owner}." if self.owner else ""
        return f"{self.file}({self.line}): {qualifier}{self.function}()"


@dataclass(frozen=True)
class ErrorRecord:
    """Diagnostic record built for a single intercepted error.

    Attributes:
        label: Severity label (ERROR, WARNING, NOTICE or UNKNOWN).
        timestamp: When the error was intercepted.
        client_address: Address of the client being served.
        message: The reported message.
        file: Source file the error was reported from.
        line: Source line the error was reported from.
        frames: Captured call stack, innermost first.
    """

    label: str
    timestamp: datetime
    client_address: str
    message: str
    file: str
    line: int
    frames: tuple[StackFrame, ...] = ()

    def format(self) -> str:
        """Render the record as one multi-line log entry."""
        lines = [
            f"[{format_timestamp(self.timestamp)}] [client {self.client_address}]",
            f"{self.label}: {self.message} in {self.file} at {self.line}",
            "Stack trace:",
        ]
        lines.extend(f"\t#{index} {frame.format()}" for index, frame in enumerate(self.frames))
        return "\n".join(lines) + "\n"


class LogSink(Protocol):
    def write(self, text: str, *, extra: Mapping[str, Any] | None = None) -> None:
        """Persist one formatted error record."""
        ...


class LoggingSink:
    """Log sink writing records through the standard logging module.

    Attributes:
        logger: Logger records are written to.
        level: The numeric logging level records are written at.
    """

    def __init__(self, logger: str | logging.Logger = "flywheel.errors", level: str = "ERROR"):
        """Initialize the sink.

        Args:
            logger: Logger or logger name to write to.
            level: String representation of the log level (e.g., "ERROR",
                "WARNING"). Case-insensitive.
        """
        self.logger = logging.getLogger(logger) if isinstance(logger, str) else logger
        self.level = getattr(logging, level.upper())

    def write(self, text: str, *, extra: Mapping[str, Any] | None = None) -> None:
        self.logger.log(self.level, text, extra=dict(extra or {}))


def _walk_stack(frame: FrameType | None) -> Iterator[FrameType]:
    while frame is not None:
        if frame.f_globals.get("__name__") not in _SKIPPED_MODULES:
            yield frame
        frame = frame.f_back


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as ``Mon 19/Oct/2026 09:05:07``."""
    return (
        f"{_WEEKDAYS[value.weekday()]} {value.day:02d}/{_MONTHS[value.month - 1]}/{value.year} "
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )


def _single_line(value: str) -> str:
    return value.replace("\r", "").replace("\n", "")


class ErrorInterceptor:
    """One-shot sink for runtime-reported errors.

    Examples:
        Scope the interceptor to a block:

        >>> with ErrorInterceptor(mask=Severity.ERROR | Severity.WARNING):
        ...     trigger_error("disk almost full", Severity.WARNING)

        Build it from application settings:

        >>> interceptor = ErrorInterceptor.from_settings(ApplicationSettings())
        >>> interceptor.install()
    """

    def __init__(
        self,
        mask: int = Severity.ALL,
        sink: LogSink | None = None,
        trace_depth: int = DEFAULT_TRACE_DEPTH,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the interceptor.

        Args:
            mask: Severity bits this interceptor handles.
            sink: Where formatted records are written. Defaults to a
                LoggingSink on the ``flywheel.errors`` logger.
            trace_depth: Maximum number of stack frames per record.
            clock: Returns the timestamp of a record. Defaults to
                :meth:`datetime.now`.
        """
        self.mask = Severity(mask)
        self.sink: LogSink = sink or LoggingSink()
        self.trace_depth = trace_depth
        self.clock = clock or datetime.now
        self._lock = threading.Lock()
        self._installed = False
        self._previous: Callable[..., Any] | None = None
        # Keep one bound method so the installed hook can be recognised
        self._hook = self._showwarning

    @classmethod
    def from_settings(cls, settings: "ApplicationSettings") -> "ErrorInterceptor":
        return cls(
            mask=settings.error_reporting,
            sink=LoggingSink(settings.error_logger, settings.error_log_level),
            trace_depth=settings.trace_depth,
        )

    @property
    def installed(self) -> bool:
        return self._installed

    def install(self, mask: int | None = None) -> "ErrorInterceptor":
        """Install the interceptor as the process-wide error hook.

        Installing an already installed interceptor only updates its mask.

        Args:
            mask: Replaces the severity mask when given.

        Returns:
            The interceptor.
        """
        with self._lock:
            if mask is not None:
                self.mask = Severity(mask)
            if not self._installed:
                # A stale copy of the hook may still be active
                if warnings.showwarning is not self._hook:
                    self._previous = warnings.showwarning
                warnings.showwarning = self._hook
                self._installed = True
                LOGGER.debug("Error interceptor installed with mask %r", self.mask)
        return self

    def uninstall(self) -> None:
        """Restore the hook that was active before :meth:`install`.

        The previous hook is only restored if this interceptor is still the
        active one, so a hook installed later is left in place. A stale copy
        of the hook put back after the interceptor fired is removed as well.
        """
        with self._lock:
            if not self._installed and warnings.showwarning is self._hook:
                warnings.showwarning = self._previous  # type: ignore[assignment]
            self._uninstall()

    def _uninstall(self) -> None:
        # Caller holds the lock
        if not self._installed:
            return
        if warnings.showwarning is self._hook:
            warnings.showwarning = self._previous  # type: ignore[assignment]
        self._installed = False
        LOGGER.debug("Error interceptor uninstalled")

    def _claim(self, code: int, installed_only: bool) -> bool:
        """Check ``code`` against the mask and disable the interceptor.

        Only one caller can claim an installed interceptor.
        """
        with self._lock:
            if installed_only and not self._installed:
                return False
            if not code & self.mask:
                return False
            self._uninstall()
            return True

    def __enter__(self) -> "ErrorInterceptor":
        return self.install()

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_value: BaseException | None,
        _traceback: TracebackType | None,
    ) -> None:
        self.uninstall()

    def _showwarning(
        self,
        message: Warning | str,
        category: type[Warning],
        filename: str,
        lineno: int,
        file: TextIO | None = None,
        line: str | None = None,
    ) -> None:
        code = severity_of(category)
        if self._claim(code, installed_only=True):
            self._write(code, str(message), filename, lineno)
            return

        # Masked, or already fired: the warning goes where it would have
        # gone without the interceptor
        previous = self._previous
        if previous is not None and previous is not self._hook:
            previous(message, category, filename, lineno, file, line)

    def handle(self, code: int, message: str, file: str | None, line: int | None) -> bool:
        """Record a runtime-reported error.

        The interceptor is uninstalled before the record is built. Calling
        this directly records the error whether or not the interceptor is
        installed.

        Args:
            code: Severity code of the error.
            message: The reported message.
            file: Source file the error was reported from.
            line: Source line the error was reported from.

        Returns:
            True if a record was written, False if the severity is outside
            the mask.
        """
        if not self._claim(code, installed_only=False):
            return False
        self._write(code, message, file, line)
        return True

    def _write(self, code: int, message: str, file: str | None, line: int | None) -> None:
        record = ErrorRecord(
            label=label_for(code),
            timestamp=self.clock(),
            client_address=_single_line(resolve_client_address()),
            message=message,
            file=file or "unknown",
            line=line or 0,
            frames=self.capture_stack(),
        )

        context = get_context()
        extra = {
            "severity": record.label,
            "client_address": record.client_address,
            "request_id": str(context.request_id) if context.request_id is not None else None,
        }
        self.sink.write(record.format(), extra=extra)

    def capture_stack(self) -> tuple[StackFrame, ...]:
        """Capture the caller's stack, innermost frame first.

        Frames of the interceptor, of trigger_error and of the warnings
        machinery are skipped. At most ``trace_depth`` real frames are
        returned.
        """
        frame = inspect.currentframe()
        try:
            return tuple(
                StackFrame.from_frame(f) for f in islice(_walk_stack(frame), self.trace_depth)
            )
        finally:
            del frame
