from collections.abc import Callable, Iterator
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

# Marker holding the configuration key a setter is declared for
_CONFIGURES_KEY_ATTR = "_configures_key"


class ConfigurationRouter:
    """Table routing configuration keys to setter methods.

    The router stores method names rather than functions so that a subclass
    overriding a setter without re-declaring it still receives the call.
    """

    __slots__ = ("_setters",)

    def __init__(self) -> None:
        self._setters: dict[str, str] = {}

    def register(self, key: str, method_name: str) -> None:
        """Register the method that handles a configuration key.

        Args:
            key: The configuration key.
            method_name: Name of the single-argument method to call.
        """
        self._setters[key] = method_name

    def setter_for(self, instance: Any, key: str) -> Callable[[Any], Any] | None:
        """Return the bound setter for ``key`` on ``instance``, if any."""
        method_name = self._setters.get(key)
        if method_name is None:
            return None
        return getattr(instance, method_name)  # type: ignore[no-any-return]

    def keys(self) -> Iterator[str]:
        return iter(self._setters)

    def __contains__(self, key: object) -> bool:
        return key in self._setters


def configures(key: str) -> Callable[[F], F]:
    """Decorator declaring a method as the setter for a configuration key.

    The method is called with the configured value whenever the key is
    applied to the application. Keys without a declared setter are written to
    the configuration registry instead.

    Example:
        >>> class WebApplication(Application):
        ...     @configures("session_name")
        ...     def set_session_name(self, name: str) -> None:
        ...         self.session_name = name
    """
    if not key:
        raise ValueError("A configuration key is required")

    def decorator(func: F) -> F:
        setattr(func, _CONFIGURES_KEY_ATTR, key)
        return func

    return decorator


def setup_configuration_routing(cls: type) -> ConfigurationRouter:
    """Set up configuration routing for a class.

    Scans the class hierarchy for methods decorated with
    :func:`configures`. Base classes are scanned first so that a subclass
    declaring a setter for the same key takes precedence.

    Args:
        cls: The class to set up routing for.

    Returns:
        A configured ConfigurationRouter.
    """
    router = ConfigurationRouter()

    for klass in reversed(cls.__mro__):
        for name, value in klass.__dict__.items():
            key = getattr(value, _CONFIGURES_KEY_ATTR, None)
            if key is not None:
                router.register(key, name)

    return router
