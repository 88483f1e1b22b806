from flywheel.config import ConfigurationRegistry


def test_set_and_get():
    registry = ConfigurationRegistry()

    registry.set("locale", "fr-FR")

    assert registry.get("locale") == "fr-FR"
    assert registry.get("missing") is None
    assert registry.get("missing", "fallback") == "fallback"


def test_initial_values_are_copied():
    values = {"a": 1}
    registry = ConfigurationRegistry(values)

    registry.set("b", 2)

    assert values == {"a": 1}


def test_membership_and_iteration():
    registry = ConfigurationRegistry({"a": 1, "b": 2})

    assert "a" in registry
    assert registry.has("b")
    assert not registry.has("c")
    assert list(registry) == ["a", "b"]
    assert len(registry) == 2


def test_delete_update_and_clear():
    registry = ConfigurationRegistry({"a": 1})

    registry.update({"b": 2, "c": 3})
    registry.delete("a")
    registry.delete("missing")

    assert registry.all() == {"b": 2, "c": 3}

    registry.clear()

    assert len(registry) == 0


def test_all_returns_a_copy():
    registry = ConfigurationRegistry({"a": 1})

    registry.all()["a"] = 2

    assert registry.get("a") == 1


def test_none_values_are_stored():
    registry = ConfigurationRegistry()

    registry.set("theme", None)

    assert "theme" in registry
