"""Path aliases and alias-based imports.

An alias binds a symbolic name to a directory. Dotted alias ids such as
``app.models.user`` are resolved against the root alias (``app``) and the
remaining parts are treated as path segments.
"""

import importlib.util
import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from types import ModuleType

from .exceptions import AliasImportError

LOGGER = logging.getLogger(__name__)


def load_module_from_path(name: str, filename: str, register: bool = True) -> ModuleType:
    """Load and execute a Python source file as a module.

    Args:
        name: Name given to the module.
        filename: Path of the ``.py`` file. A package ``__init__.py`` is
            loaded as a package so its submodules can be imported.
        register: Whether the module is added to ``sys.modules``.

    Returns:
        The executed module.

    Raises:
        ImportError: If no loader can be created for the file.
    """
    search_locations = None
    if os.path.basename(filename) == "__init__.py":
        search_locations = [os.path.dirname(filename)]

    spec = importlib.util.spec_from_file_location(
        name, filename, submodule_search_locations=search_locations
    )
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load module {name!r} from {filename}")

    module = importlib.util.module_from_spec(spec)
    if register:
        sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        if register:
            sys.modules.pop(name, None)
        raise
    return module


class Loader:
    """Registry of path aliases and resolver for alias imports.

    Attributes:
        aliases: Mapping of alias name to absolute directory.
        app_path: Path of the running application, if one was set.
        imports: Results of completed alias imports, keyed by alias id.
    """

    def __init__(self) -> None:
        self.aliases: dict[str, str] = {}
        self.app_path: str | None = None
        self.imports: dict[str, ModuleType | str] = {}

    def set_path_of_alias(self, alias: str, path: "str | os.PathLike[str] | None") -> None:
        """Bind ``alias`` to ``path``, or remove the alias when path is None."""
        if path is None:
            self.aliases.pop(alias, None)
            return
        self.aliases[alias] = os.path.abspath(os.fspath(path))

    def get_path_of_alias(self, alias: str) -> str | None:
        """Resolve a dotted alias id to a filesystem path.

        Returns:
            The path, or None when the root alias is not registered. The
            path is not checked for existence.
        """
        root, _, rest = alias.partition(".")
        base = self.aliases.get(root)
        if base is None:
            return None
        if not rest:
            return base
        return os.path.join(base, *rest.split("."))

    def import_alias(self, alias: str) -> ModuleType | str:
        """Import the code an alias id points to.

        ``root.pkg.*`` makes the directory importable by adding it to
        ``sys.path`` and returns the directory. ``root.pkg.module`` loads
        ``module.py`` (or ``module/__init__.py``) and returns the module.
        Each alias id is imported at most once.

        Raises:
            AliasImportError: If the alias id does not resolve to an existing
                directory or module file.
        """
        if alias in self.imports:
            return self.imports[alias]

        result: ModuleType | str
        if alias.endswith(".*"):
            result = self._import_directory(alias)
        else:
            result = self._import_module(alias)

        self.imports[alias] = result
        LOGGER.debug("Imported alias %s", alias)
        return result

    def _import_directory(self, alias: str) -> str:
        path = self.get_path_of_alias(alias[:-2])
        if path is None or not os.path.isdir(path):
            raise AliasImportError.for_alias(alias, "not a directory")
        if path not in sys.path:
            sys.path.append(path)
        return path

    def _import_module(self, alias: str) -> ModuleType:
        path = self.get_path_of_alias(alias)
        if path is None:
            raise AliasImportError.for_alias(alias, "unknown alias")

        for filename in (path + ".py", os.path.join(path, "__init__.py")):
            if os.path.isfile(filename):
                return load_module_from_path(alias, filename)
        raise AliasImportError.for_alias(alias, f"no module at {path}")

    @contextmanager
    def staged(self) -> Iterator["Loader"]:
        """Roll back alias and app path changes if the block raises.

        Imports that already ran are not undone.
        """
        aliases = dict(self.aliases)
        app_path = self.app_path
        try:
            yield self
        except BaseException:
            self.aliases = aliases
            self.app_path = app_path
            raise


default_loader = Loader()
