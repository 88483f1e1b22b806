"""Exceptions raised while bootstrapping an application."""

import os
from typing import Any


class FlywheelError(Exception):
    """Base class for all errors raised by flywheel."""

    pass


class ConfigurationError(FlywheelError):
    """Raised when the application configuration cannot be used."""

    pass


class MissingConfigurationError(ConfigurationError):
    """Raised when a required configuration key is absent.

    Attributes:
        key: The name of the missing configuration key.
    """

    def __init__(self, message: str, key: str):
        super().__init__(message)
        self.key = key

    @classmethod
    def for_key(cls, key: str) -> "MissingConfigurationError":
        return cls(f'Application: missing application\'s config "{key}"', key)


class ConfigurationSourceError(ConfigurationError):
    """Raised when a configuration source cannot be loaded."""

    @classmethod
    def for_source(cls, source: Any, reason: str) -> "ConfigurationSourceError":
        return cls(f"Application: cannot load configuration from {source!r}: {reason}")


class InvalidPathError(FlywheelError):
    """Raised when a base path does not resolve to an existing directory.

    Attributes:
        path: The path as it was supplied.
    """

    def __init__(self, message: str, path: Any):
        super().__init__(message)
        self.path = path

    @classmethod
    def for_path(cls, path: "str | os.PathLike[str]") -> "InvalidPathError":
        return cls(f'Application: base path "{path}" is not a valid directory.', path)


class AliasImportError(FlywheelError):
    """Raised when an alias cannot be resolved to an importable location."""

    def __init__(self, message: str, alias: str):
        super().__init__(message)
        self.alias = alias

    @classmethod
    def for_alias(cls, alias: str, reason: str = "alias cannot be resolved") -> "AliasImportError":
        return cls(f'Loader: cannot import "{alias}": {reason}', alias)


class TypeContractError(FlywheelError, TypeError):
    """Raised when a value does not satisfy a required capability."""

    @classmethod
    def for_value(cls, value: Any, expected: type) -> "TypeContractError":
        return cls(
            f"Application: {type(value).__name__} was assigned but an instance of "
            f"'{expected.__module__}.{expected.__qualname__}' is required"
        )
