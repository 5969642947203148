"""Tests for structural tree mutations."""

import pytest

from pagebuilder.components import ComponentRegistry, ComponentTypeDefinition
from pagebuilder.tree import TreeModel, add_child, delete_child, duplicate_child, move_down, move_up


@pytest.fixture
def parent(tree):
    """Container with three text children a, b, c."""
    container = tree.create_node("container")
    for content in ("a", "b", "c"):
        container.children.append(tree.create_node("text", {"content": content}))
    return container


def contents(node):
    return [child.props["content"] for child in node.children]


@pytest.mark.unit
class TestAddChild:
    """Test add_child."""

    def test_appends_to_container(self, registry, tree):
        container = tree.create_node("container")
        text = tree.create_node("text")
        changed = []

        assert add_child(registry, container, text, on_change=changed.append) is True
        assert container.children == [text]
        assert changed == [container]

    def test_rejected_on_leaf_type(self, registry, tree):
        """Adding to a text node leaves its children empty and raises nothing."""
        text = tree.create_node("text")
        changed = []

        assert add_child(registry, text, tree.create_node("image"), on_change=changed.append) is False
        assert text.children == []
        assert changed == []

    def test_rejected_on_unknown_parent_type(self, registry, tree):
        orphan = tree.create_node("container")
        orphan.type = "gone"

        assert add_child(registry, orphan, tree.create_node("text")) is False
        assert orphan.children == []

    def test_respects_max_children(self):
        registry = ComponentRegistry()
        registry.register(ComponentTypeDefinition(type="pair", label="Pair", allows_children=True, max_children=2))
        registry.register(ComponentTypeDefinition(type="leaf", label="Leaf"))
        model = TreeModel(registry)
        pair = model.create_node("pair")

        results = [add_child(registry, pair, model.create_node("leaf")) for _ in range(3)]

        assert results == [True, True, False]
        assert len(pair.children) == 2


@pytest.mark.unit
class TestDeleteChild:
    """Test delete_child."""

    def test_removes_matching_child(self, parent):
        target = parent.children[1]
        changed = []

        assert delete_child(parent, target.id, on_change=changed.append) is True
        assert contents(parent) == ["a", "c"]
        assert changed == [parent]

    def test_missing_id_is_noop(self, parent):
        changed = []

        assert delete_child(parent, "missing", on_change=changed.append) is False
        assert contents(parent) == ["a", "b", "c"]
        assert changed == []

    def test_no_parent_is_noop(self, page):
        """The root has no parent, so deleting it does nothing."""
        assert delete_child(None, page.root.id) is False


@pytest.mark.unit
class TestDuplicateChild:
    """Test duplicate_child."""

    def test_clone_inserted_after_original(self, parent):
        original = parent.children[0]

        clone = duplicate_child(parent, original.id)

        assert clone is not None
        assert contents(parent) == ["a", "a", "b", "c"]
        assert parent.children[1] is clone
        assert clone.id != original.id

    def test_whole_subtree_gets_fresh_ids(self, tree):
        """Every node of the clone has an id unused in the original subtree."""
        root = tree.create_node("container")
        outer = tree.create_node("container")
        inner = tree.create_node("container")
        inner.children.append(tree.create_node("text"))
        outer.children.append(inner)
        outer.children.append(tree.create_node("image"))
        root.children.append(outer)

        clone = duplicate_child(root, outer.id)

        original_ids = [node.id for node in outer.walk()]
        clone_ids = [node.id for node in clone.walk()]
        assert len(clone_ids) == len(original_ids) == 4
        assert len(set(clone_ids)) == len(clone_ids)
        assert not set(clone_ids) & set(original_ids)

    def test_clone_is_deep(self, parent):
        original = parent.children[0]
        clone = duplicate_child(parent, original.id)

        clone.props["style"]["color"] = "#ff0000"

        assert original.props["style"]["color"] == "#333333"

    def test_missing_id_returns_none(self, parent):
        assert duplicate_child(parent, "missing") is None
        assert len(parent.children) == 3

    def test_no_parent_returns_none(self, page):
        assert duplicate_child(None, page.root.id) is None


@pytest.mark.unit
class TestMoves:
    """Test move_up / move_down."""

    def test_move_up_first_child_is_noop(self, parent):
        first = parent.children[0]
        changed = []

        assert move_up(parent, first.id, on_change=changed.append) is False
        assert contents(parent) == ["a", "b", "c"]
        assert changed == []

    def test_move_up_second_child_swaps(self, parent):
        second = parent.children[1]

        assert move_up(parent, second.id) is True
        assert contents(parent) == ["b", "a", "c"]

    def test_move_down_last_child_is_noop(self, parent):
        assert move_down(parent, parent.children[2].id) is False
        assert contents(parent) == ["a", "b", "c"]

    def test_move_down_swaps(self, parent):
        assert move_down(parent, parent.children[0].id) is True
        assert contents(parent) == ["b", "a", "c"]

    def test_missing_id_is_noop(self, parent):
        assert move_up(parent, "missing") is False
        assert move_down(parent, "missing") is False
        assert contents(parent) == ["a", "b", "c"]

    def test_no_parent_is_noop(self):
        assert move_up(None, "x") is False
        assert move_down(None, "x") is False
