"""Application of configuration values onto an application instance."""

import logging
from collections.abc import Mapping
from typing import Any

from ..config import ConfigurationRegistry
from ..routing import ConfigurationRouter

LOGGER = logging.getLogger(__name__)


class ConfigurationApplier:
    """Route configuration entries to setters or the configuration registry.

    A key with a setter declared through
    :func:`~flywheel.routing.configures` on the target's class is passed to
    that setter. Every other key is written to the registry, where it is
    visible process-wide.

    Errors raised by a setter are not caught.
    """

    def __init__(
        self,
        target: Any,
        router: ConfigurationRouter,
        registry: ConfigurationRegistry,
    ):
        """Initialize the applier.

        Args:
            target: Instance whose setters receive configuration values.
            router: Setter table of the target's class.
            registry: Destination for keys without a setter.
        """
        self.target = target
        self.router = router
        self.registry = registry

    def apply(self, config: Mapping[str, Any] | str, value: Any = None) -> None:
        """Apply a configuration mapping, or a single key/value pair.

        Args:
            config: A mapping applied entry by entry in its own order, or a
                single key.
            value: The value for a single key. A single key with a None
                value is ignored.
        """
        if isinstance(config, Mapping):
            for key, item in config.items():
                self.set_parameter(key, item)
        elif value is not None:
            self.set_parameter(config, value)

    def set_parameter(self, key: str, value: Any) -> None:
        """Apply one key/value pair."""
        setter = self.router.setter_for(self.target, key)
        if setter is None:
            LOGGER.debug("No setter for %r, storing it in the configuration registry", key)
            self.registry.set(key, value)
        else:
            setter(value)
