"""Flywheel - application bootstrap core for request-handling frameworks.

This module provides the public API for building applications.
"""

from .application import (
    Application,
    ApplicationType,
    ErrorInterceptor,
    resolve_client_address,
)
from .config import ConfigurationRegistry, default_registry, load_configuration
from .context import RequestContext, get_context, scoped_context
from .controller import Controller
from .exceptions import (
    AliasImportError,
    ConfigurationError,
    ConfigurationSourceError,
    FlywheelError,
    InvalidPathError,
    MissingConfigurationError,
    TypeContractError,
)
from .i18n import Translator
from .loader import Loader, default_loader
from .routing import configures
from .settings import ApplicationSettings
from .severity import Severity, UserError, UserNotice, trigger_error

__all__ = [
    # Application
    "Application",
    "ApplicationSettings",
    "ApplicationType",
    "Controller",
    "configures",
    # Collaborators
    "ConfigurationRegistry",
    "Loader",
    "RequestContext",
    "Translator",
    "default_loader",
    "default_registry",
    "get_context",
    "load_configuration",
    "scoped_context",
    # Error reporting
    "ErrorInterceptor",
    "Severity",
    "UserError",
    "UserNotice",
    "resolve_client_address",
    "trigger_error",
    # Exceptions
    "AliasImportError",
    "ConfigurationError",
    "ConfigurationSourceError",
    "FlywheelError",
    "InvalidPathError",
    "MissingConfigurationError",
    "TypeContractError",
]
