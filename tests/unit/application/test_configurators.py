"""Tests for routing configuration entries to setters or the registry."""

from unittest.mock import Mock

import pytest

from flywheel import ConfigurationRegistry, configures
from flywheel.application import ConfigurationApplier
from flywheel.routing import setup_configuration_routing


class Target:
    def __init__(self):
        self.received: list[tuple[str, object]] = []

    @configures("base_path")
    def set_base_path(self, value):
        self.received.append(("base_path", value))

    @configures("locale")
    def set_locale(self, value):
        self.received.append(("locale", value))

    def set_theme(self, value):
        # Not declared, so never used as a setter
        self.received.append(("theme", value))


@pytest.fixture
def target() -> Target:
    return Target()


@pytest.fixture
def applier(target, registry) -> ConfigurationApplier:
    return ConfigurationApplier(target, setup_configuration_routing(Target), registry)


def test_declared_keys_go_to_setters(applier, target, registry):
    applier.apply({"base_path": "/srv/app"})

    assert target.received == [("base_path", "/srv/app")]
    assert "base_path" not in registry


def test_unknown_keys_go_to_registry(applier, target, registry):
    applier.apply({"theme": "dark", "page_size": 20})

    assert target.received == []
    assert registry.all() == {"theme": "dark", "page_size": 20}


def test_entries_are_applied_in_mapping_order(applier, target, registry):
    registry.set = Mock(side_effect=lambda key, value: target.received.append((key, value)))

    applier.apply({"locale": "fr", "theme": "dark", "base_path": "/srv"})

    assert target.received == [("locale", "fr"), ("theme", "dark"), ("base_path", "/srv")]


def test_single_pair_form(applier, target, registry):
    applier.apply("locale", "de")
    applier.apply("theme", "light")

    assert target.received == [("locale", "de")]
    assert registry.get("theme") == "light"


def test_single_pair_with_none_value_is_ignored(applier, target, registry):
    applier.apply("theme", None)
    applier.apply("locale", None)

    assert target.received == []
    assert len(registry) == 0


def test_mapping_form_passes_none_values(applier, registry):
    applier.apply({"theme": None})

    assert "theme" in registry
    assert registry.get("theme") is None


def test_set_parameter_routes_one_pair(applier, target, registry):
    applier.set_parameter("locale", "vi")
    applier.set_parameter("currency", "VND")

    assert target.received == [("locale", "vi")]
    assert registry.get("currency") == "VND"


def test_setter_errors_propagate(registry):
    class Failing:
        @configures("port")
        def set_port(self, value):
            raise ValueError(f"invalid port {value}")

    applier = ConfigurationApplier(Failing(), setup_configuration_routing(Failing), registry)

    with pytest.raises(ValueError, match="invalid port 0"):
        applier.apply({"port": 0, "after": 1})

    assert "after" not in registry


def test_setters_are_called_once_per_key(registry):
    setter = Mock()

    class Counting:
        @configures("name")
        def set_name(self, value):
            setter(value)

    applier = ConfigurationApplier(Counting(), setup_configuration_routing(Counting), registry)
    applier.apply({"name": "x"})

    setter.assert_called_once_with("x")


def test_isolated_registries_do_not_share_values(target):
    first, second = ConfigurationRegistry(), ConfigurationRegistry()

    ConfigurationApplier(target, setup_configuration_routing(Target), first).apply({"a": 1})

    assert first.get("a") == 1
    assert "a" not in second
