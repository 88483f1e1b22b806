import logging
import os
import sys
from abc import ABC, abstractmethod
from collections.abc import Iterable
from enum import IntEnum
from typing import Any, ClassVar

from ..config import ConfigurationRegistry, ConfigurationSource, default_registry, load_configuration
from ..context import get_context
from ..controller import Controller
from ..exceptions import InvalidPathError, MissingConfigurationError, TypeContractError
from ..i18n import Translator
from ..loader import Loader, default_loader
from ..routing import ConfigurationRouter, configures, setup_configuration_routing
from ..settings import ApplicationSettings
from ..severity import Severity
from .client import resolve_client_address
from .configurators import ConfigurationApplier
from .interceptor import ErrorInterceptor

LOGGER = logging.getLogger(__name__)


class ApplicationType(IntEnum):
    WEB = 1
    CONSOLE = 2
    API = 3


class Application(ABC):
    """Base class for an application instance.

    Constructing an application boots it: the configuration source is
    resolved, the ``app`` and ``public`` path aliases are registered, the
    aliases listed under ``import`` are imported, the configuration is applied
    between the ``pre_init``/``init``/``after_init`` hooks and finally the
    error interceptor is installed. Running the application is left to the
    concrete subclass through :meth:`run`.

    Configuration keys with a setter declared through
    :func:`~flywheel.routing.configures` are passed to that setter; all
    other keys are written to the configuration registry.

    Examples:
        >>> class ConsoleApplication(Application):
        ...     @configures("verbosity")
        ...     def set_verbosity(self, level: int) -> None:
        ...         self.verbosity = level
        ...
        ...     def run(self) -> int:
        ...         return 0
        >>>
        >>> app = ConsoleApplication(
        ...     {"app_path": "/srv/app", "verbosity": 2, "locale": "fr-FR"},
        ...     ApplicationType.CONSOLE,
        ... )
        >>> app.verbosity, app.get_locale()
        (2, 'fr-FR')
    """

    # Class-level setter table
    _configuration_router: ClassVar[ConfigurationRouter]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Set up configuration routing when a subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._configuration_router = setup_configuration_routing(cls)

    def __init__(
        self,
        config: ConfigurationSource,
        app_type: ApplicationType | int,
        *,
        settings: ApplicationSettings | None = None,
        registry: ConfigurationRegistry | None = None,
        loader: Loader | None = None,
        interceptor: ErrorInterceptor | None = None,
    ):
        """Boot the application.

        Args:
            config: Configuration mapping, or the path of a Python module
                defining a ``config`` mapping. Must contain ``app_path``.
            app_type: The execution context of the application.
            settings: Process-level settings. Read from the environment when
                omitted.
            registry: Destination for configuration keys without a setter.
                Defaults to the process-wide registry.
            loader: Path alias registry and import resolver. Defaults to the
                process-wide loader.
            interceptor: Error interceptor to install. One is built from
                ``settings`` when omitted.

        Raises:
            MissingConfigurationError: If ``app_path`` is not configured.
            InvalidPathError: If ``app_path`` is not an existing directory.
            AliasImportError: If an entry of ``import`` cannot be imported.
            TypeContractError: If ``app_type`` is not a known type.
            ConfigurationSourceError: If ``config`` cannot be loaded.
        """
        self.settings = settings if settings is not None else ApplicationSettings()
        self.registry = registry if registry is not None else default_registry
        self.loader = loader if loader is not None else default_loader
        self.configurator = ConfigurationApplier(self, self._configuration_router, self.registry)
        self.error_interceptor = interceptor or ErrorInterceptor.from_settings(self.settings)
        self.error_reporting = Severity(self.settings.error_reporting)

        self._base_path: str | None = None
        self._controller: Controller | None = None
        self._translator: Translator | None = None

        application_type = self._coerce_type(app_type)
        config = load_configuration(config)

        # Aliases and the app path are rolled back if booting fails
        with self.loader.staged():
            self._setup_paths(config)
            if "import" in config:
                self._import(config.pop("import"))

            self._type = application_type

            self.pre_init()
            self.configuration(config)
            self.init()
            self.after_init()

        self.error_interceptor.install(self.error_reporting)
        LOGGER.debug("%s booted as %s", type(self).__name__, self._type.name)

    @staticmethod
    def _coerce_type(app_type: ApplicationType | int) -> ApplicationType:
        try:
            return ApplicationType(app_type)
        except ValueError as e:
            raise TypeContractError(f"Application: unknown application type {app_type!r}") from e

    def _setup_paths(self, config: dict[str, Any]) -> None:
        if config.get("app_path") is None:
            raise MissingConfigurationError.for_key("app_path")

        self.set_base_path(config.pop("app_path"))
        self.loader.app_path = self._base_path
        self.loader.set_path_of_alias("app", self._base_path)
        self.loader.set_path_of_alias("public", self._script_directory())
        LOGGER.debug("Application path set to %s", self._base_path)

    @staticmethod
    def _script_directory() -> str:
        script = get_context().environ.get("SCRIPT_FILENAME")
        if not script and sys.argv and sys.argv[0]:
            script = sys.argv[0]
        if not script:
            return os.getcwd()
        return os.path.dirname(os.path.abspath(script))

    def _import(self, aliases: str | Iterable[str]) -> None:
        if isinstance(aliases, str):
            aliases = [aliases]
        for alias in aliases:
            self.loader.import_alias(alias)

    def pre_init(self) -> None:
        """Called before the configuration is applied."""
        pass

    def configuration(self, config: Any, value: Any = None) -> None:
        """Apply a configuration mapping, or a single key/value pair.

        Args:
            config: A mapping, or a single configuration key.
            value: The value when ``config`` is a single key.
        """
        self.configurator.apply(config, value)

    def set_parameter(self, key: str, value: Any) -> None:
        """Apply one configuration value through its setter or the registry."""
        self.configurator.set_parameter(key, value)

    def init(self) -> None:
        """Called after the configuration has been applied."""
        pass

    def after_init(self) -> None:
        """Called once initialization has completed."""
        pass

    def before_run(self) -> None:
        pass

    @abstractmethod
    def run(self) -> Any:
        """Run the application in its execution context."""
        ...

    def after_run(self) -> None:
        pass

    def execute(self) -> Any:
        """Run the application between its before and after run hooks.

        Returns:
            The result of :meth:`run`.
        """
        self.before_run()
        result = self.run()
        self.after_run()
        return result

    @property
    def type(self) -> ApplicationType:
        return self._type

    def get_type(self) -> ApplicationType:
        return self._type

    @property
    def base_path(self) -> str | None:
        return self._base_path

    def get_base_path(self) -> str | None:
        return self._base_path

    @configures("base_path")
    def set_base_path(self, path: "str | os.PathLike[str]") -> None:
        """Set the application's base directory.

        Raises:
            InvalidPathError: If the path does not resolve to an existing
                directory.
        """
        try:
            resolved = os.path.realpath(path)
        except TypeError as e:
            raise InvalidPathError.for_path(path) from e
        if not os.path.isdir(resolved):
            raise InvalidPathError.for_path(path)
        self._base_path = resolved

    @configures("error_reporting")
    def set_error_reporting(self, mask: int) -> None:
        """Set the severity mask the error interceptor is installed with."""
        self.error_reporting = Severity(mask)

    @property
    def controller(self) -> Controller | None:
        return self._controller

    def get_controller(self) -> Controller | None:
        return self._controller

    @configures("controller")
    def set_controller(self, controller: Controller) -> None:
        """Set the active controller, replacing any previous one.

        Raises:
            TypeContractError: If ``controller`` is not a Controller.
        """
        if not isinstance(controller, Controller):
            raise TypeContractError.for_value(controller, Controller)
        self._controller = controller
        LOGGER.debug("Controller set to %s", controller.name)

    def get_client_ip(self) -> str:
        return resolve_client_address()

    def get_locale(self) -> str:
        """Return the configured locale, or the default locale."""
        return self.registry.get("locale") or self.settings.default_locale

    def get_translator(self) -> Translator:
        """Return this application's translator, creating it on first use."""
        if self._translator is None:
            self._translator = Translator(
                self.get_locale(),
                directory=self.settings.translations_dir,
                domain=self.settings.translation_domain,
            )
        return self._translator
