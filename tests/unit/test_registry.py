"""Tests for the component registry."""

import pytest
from hypothesis import given, strategies as st

from pagebuilder.components import (
    HIDDEN_CATEGORY,
    ROOT_TYPE,
    ComponentRegistry,
    ComponentTypeDefinition,
)
from pagebuilder.core.events import BuilderEvents
from pagebuilder.rendering import TextRenderer


def make_definition(type_name: str, label: str = "Thing", **kwargs) -> ComponentTypeDefinition:
    return ComponentTypeDefinition(type=type_name, label=label, **kwargs)


@pytest.mark.unit
class TestRegistration:
    """Test register/get semantics."""

    def test_get_registered_definition(self):
        registry = ComponentRegistry()
        definition = make_definition("card")

        registry.register(definition)

        assert registry.get("card") == definition
        assert "card" in registry
        assert len(registry) == 1

    def test_get_unknown_type_is_none(self):
        """Lookup is exact; unknown keys return None."""
        registry = ComponentRegistry()
        registry.register(make_definition("card"))

        assert registry.get("Card") is None
        assert registry.get("missing") is None

    def test_reregister_replaces_definition(self):
        registry = ComponentRegistry()
        registry.register(make_definition("card", label="First"))
        registry.register(make_definition("card", label="Second"))

        assert registry.get("card").label == "Second"
        assert len(registry) == 1

    def test_empty_type_key_rejected(self):
        """Whitespace-only keys are refused by the registry."""
        registry = ComponentRegistry()
        with pytest.raises(ValueError):
            registry.register(make_definition("   "))

    def test_unregister_removes_definition_and_renderer(self):
        registry = ComponentRegistry()
        registry.register(make_definition("card"), TextRenderer())

        registry.unregister("card")

        assert registry.get("card") is None
        assert registry.renderer_for("card") is None

    def test_renderer_lookup_requires_definition(self):
        registry = ComponentRegistry()
        registry.register_renderer("orphan", TextRenderer())

        assert registry.renderer_for("orphan") is None

    def test_register_publishes_event(self):
        events = BuilderEvents()
        seen = []
        events.component_registered.subscribe(seen.append)
        registry = ComponentRegistry(events)

        definition = make_definition("card")
        registry.register(definition)

        assert seen == [definition]


@pytest.mark.unit
class TestListing:
    """Test palette listings."""

    def test_list_all_in_insertion_order(self):
        registry = ComponentRegistry()
        for name in ("b", "a", "c"):
            registry.register(make_definition(name))

        assert [d.type for d in registry.list_all()] == ["b", "a", "c"]

    def test_list_by_category_skips_hidden_root(self, registry):
        grouped = registry.list_by_category()

        assert HIDDEN_CATEGORY not in grouped
        listed = [d.type for group in grouped.values() for d in group]
        assert ROOT_TYPE not in listed
        assert set(listed) == {"container", "text", "image"}

    def test_list_by_category_groups(self, registry):
        grouped = registry.list_by_category()

        assert [d.type for d in grouped["Layout"]] == ["container"]
        assert [d.type for d in grouped["Basic"]] == ["text", "image"]

    def test_allows_children(self, registry):
        assert registry.allows_children("container") is True
        assert registry.allows_children(ROOT_TYPE) is True
        assert registry.allows_children("text") is False
        assert registry.allows_children("unknown") is False


@given(st.lists(st.text(alphabet="abc", min_size=1, max_size=3), min_size=1, max_size=20))
def test_last_registration_wins(keys):
    """get(type) always returns the last definition registered under that key."""
    registry = ComponentRegistry()
    last = {}
    for index, key in enumerate(keys):
        definition = make_definition(key, label=f"v{index}")
        registry.register(definition)
        last[key] = definition

    for key, definition in last.items():
        assert registry.get(key) == definition
    assert len(registry) == len(last)
