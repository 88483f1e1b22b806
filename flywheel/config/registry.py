from collections.abc import Iterator, Mapping
from typing import Any


class ConfigurationRegistry:
    """Key/value store for settings that have no dedicated setter.

    A process-wide instance is available as ``default_registry``; separate
    instances can be passed to an application to keep settings isolated,
    for example in tests.
    """

    def __init__(self, values: Mapping[str, Any] | None = None):
        self.values: dict[str, Any] = dict(values or {})

    def set(self, key: str, value: Any) -> None:
        self.values[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def has(self, key: str) -> bool:
        return key in self.values

    def delete(self, key: str) -> None:
        self.values.pop(key, None)

    def update(self, values: Mapping[str, Any]) -> None:
        self.values.update(values)

    def clear(self) -> None:
        self.values.clear()

    def all(self) -> dict[str, Any]:
        """Return a copy of every stored setting."""
        return dict(self.values)

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


default_registry = ConfigurationRegistry()
