"""Configuration sources and the process-wide configuration registry."""

from .loader import ConfigurationSource, load_configuration
from .registry import ConfigurationRegistry, default_registry

__all__ = [
    "ConfigurationRegistry",
    "ConfigurationSource",
    "default_registry",
    "load_configuration",
]
