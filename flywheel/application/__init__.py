"""Application bootstrapping for flywheel.

This package contains the application supertype and the pieces it is built
from: configuration application, client address resolution and the error
interceptor.
"""

from .application import Application, ApplicationType
from .client import CLIENT_ADDRESS_KEYS, UNKNOWN_CLIENT, resolve_client_address
from .configurators import ConfigurationApplier
from .interceptor import ErrorInterceptor, ErrorRecord, LoggingSink, LogSink, StackFrame

__all__ = [
    # Application
    "Application",
    "ApplicationType",
    "ConfigurationApplier",
    # Client address
    "CLIENT_ADDRESS_KEYS",
    "UNKNOWN_CLIENT",
    "resolve_client_address",
    # Error interception
    "ErrorInterceptor",
    "ErrorRecord",
    "LogSink",
    "LoggingSink",
    "StackFrame",
]
