"""Resolution of configuration sources into mappings."""

import logging
import os
from collections.abc import Mapping
from typing import Any

from ..exceptions import ConfigurationSourceError
from ..loader import load_module_from_path

LOGGER = logging.getLogger(__name__)

CONFIG_ATTRIBUTE = "config"

ConfigurationSource = Mapping[str, Any] | str | os.PathLike[str]


def load_configuration(source: ConfigurationSource) -> dict[str, Any]:
    """Resolve a configuration source into a fresh, mutable mapping.

    A mapping is copied so the caller's object is never modified. A path is
    loaded as a Python module, evaluated exactly once, and its module-level
    ``config`` attribute is used. ``config`` may be a mapping or a callable
    returning one.

    Args:
        source: A mapping, or the path of a Python configuration module.

    Returns:
        A shallow copy of the configuration mapping.

    Raises:
        ConfigurationSourceError: If the source cannot be turned into a
            mapping.

    Example:
        ``/srv/app/config/main.py``::

            import os

            config = {
                "app_path": os.path.dirname(os.path.dirname(__file__)),
                "import": ["app.models.*"],
                "locale": "en-US",
            }
    """
    if isinstance(source, Mapping):
        return dict(source)

    if not isinstance(source, (str, os.PathLike)):
        raise ConfigurationSourceError.for_source(source, "expected a mapping or a file path")

    filename = os.fspath(source)
    if not os.path.isfile(filename):
        raise ConfigurationSourceError.for_source(source, "file does not exist")

    module_name = "_flywheel_config_" + os.path.splitext(os.path.basename(filename))[0]
    module = load_module_from_path(module_name, filename, register=False)
    LOGGER.debug("Loaded configuration module %s", filename)

    config = getattr(module, CONFIG_ATTRIBUTE, None)
    if callable(config):
        config = config()
    if not isinstance(config, Mapping):
        raise ConfigurationSourceError.for_source(
            source, f"module must define a '{CONFIG_ATTRIBUTE}' mapping"
        )
    return dict(config)
