"""Tests for dotted-path property access and field listings."""

import pytest
from hypothesis import given, strategies as st

from pagebuilder.components import DEFAULT_GROUP
from pagebuilder.core.validate import ValidationError
from pagebuilder.editing import current_value, editable_fields_for, group_fields, set_value, split_path
from pagebuilder.tree import ComponentNode


def text_node(**props) -> ComponentNode:
    return ComponentNode(id="n1", type="text", props=props)


@pytest.mark.unit
class TestPaths:
    """Test reading and writing property paths."""

    def test_split_path(self):
        assert split_path("content") == ("content", None)
        assert split_path("style.color") == ("style", "color")
        assert split_path("a.b.c") == ("a", "b.c")

    def test_current_value_top_level_and_nested(self):
        node = text_node(content="Hi", style={"color": "#fff"})

        assert current_value(node, "content") == "Hi"
        assert current_value(node, "style.color") == "#fff"

    def test_missing_values_read_as_empty_string(self):
        node = text_node(style={"color": None}, content=None)

        assert current_value(node, "content") == ""
        assert current_value(node, "missing") == ""
        assert current_value(node, "style.color") == ""
        assert current_value(node, "style.fontSize") == ""
        assert current_value(node, "content.nested") == ""

    def test_falsy_values_are_kept(self):
        node = text_node(count=0, visible=False)

        assert current_value(node, "count") == 0
        assert current_value(node, "visible") is False

    def test_set_value_does_not_modify_input(self):
        node = text_node(style={"color": "#000", "fontSize": "12px"})

        updated = set_value(node, "style.color", "#ff0000")

        assert updated["style"] == {"color": "#ff0000", "fontSize": "12px"}
        assert node.props["style"] == {"color": "#000", "fontSize": "12px"}

    def test_set_value_creates_missing_parent(self):
        updated = set_value({"content": "x"}, "style.color", "#000")
        assert updated == {"content": "x", "style": {"color": "#000"}}

    def test_set_value_replaces_non_mapping_parent(self):
        updated = set_value({"style": "color: red"}, "style.color", "#000")
        assert updated["style"] == {"color": "#000"}

    def test_deeper_paths_rejected(self):
        with pytest.raises(ValidationError):
            set_value({}, "a.b.c", 1)


@given(
    value=st.text(),
    siblings=st.dictionaries(
        st.text(min_size=1, max_size=8).filter(lambda key: key != "color"),
        st.one_of(st.text(), st.integers()),
        max_size=5,
    ),
)
def test_nested_write_round_trip(value, siblings):
    """Reading back a nested write yields the value; sibling keys are untouched."""
    node = text_node(style={**siblings, "color": "#000"}, content="x")

    updated = set_value(node, "style.color", value)

    assert current_value(updated, "style.color") == value
    assert {k: v for k, v in updated["style"].items() if k != "color"} == siblings
    assert updated["content"] == "x"


@pytest.mark.unit
class TestFields:
    """Test editable field listing and grouping."""

    def test_fields_in_declaration_order(self, registry, tree):
        node = tree.create_node("text")

        fields = editable_fields_for(registry, node)

        assert [f.path for f in fields] == [
            "content",
            "tag",
            "style.fontSize",
            "style.color",
            "style.fontWeight",
        ]

    def test_unknown_type_has_no_fields(self, registry):
        assert editable_fields_for(registry, ComponentNode(id="x", type="nope")) is None

    def test_root_has_empty_fields(self, registry, page):
        assert editable_fields_for(registry, page.root) == []

    def test_group_fields(self, registry, tree):
        groups = group_fields(editable_fields_for(registry, tree.create_node("text")))

        assert list(groups) == [DEFAULT_GROUP, "Style"]
        assert [f.path for f in groups[DEFAULT_GROUP]] == ["content", "tag"]
        assert [f.path for f in groups["Style"]] == ["style.fontSize", "style.color", "style.fontWeight"]

    def test_group_fields_empty(self):
        assert group_fields([]) == {}
        assert group_fields(None) == {}
