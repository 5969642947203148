"""
Tree Mutation Operations
Structural edits of a parent's children sequence.

Each operation returns True when it changed the tree and False for a
structural no-op (missing parent, unknown id, boundary position, or a parent
that cannot hold children). On change the optional ``on_change`` callback
is invoked synchronously with the mutated parent.
"""

from typing import Callable, Optional

from ..components.registry import ComponentRegistry
from ..core.id import new_node_id
from ..core.logging_config import get_logger
from ..monitoring import MetricsCollector, metrics_collector
from .models import ComponentNode

logger = get_logger(__name__)

ChangeCallback = Callable[[ComponentNode], None]


def _finish(
    operation: str,
    parent: Optional[ComponentNode],
    applied: bool,
    on_change: Optional[ChangeCallback],
    metrics: Optional[MetricsCollector],
) -> bool:
    (metrics or metrics_collector).record_mutation(operation, applied)
    if applied and parent is not None:
        logger.debug("tree_mutated", operation=operation, parent=parent.id)
        if on_change:
            on_change(parent)
    return applied


def add_child(
    registry: ComponentRegistry,
    parent: ComponentNode,
    new_node: ComponentNode,
    on_change: Optional[ChangeCallback] = None,
    metrics: Optional[MetricsCollector] = None,
) -> bool:
    """
    Append a node to the parent's children.

    Rejected when the parent's type does not allow children, is unknown, or
    already holds ``max_children`` nodes.
    """
    definition = registry.get(parent.type)
    if definition is None or not definition.allows_children:
        logger.info("add_child_rejected", parent=parent.id, parent_type=parent.type)
        return _finish("add_child", parent, False, on_change, metrics)

    if parent.children is None:
        parent.children = []

    if definition.max_children is not None and len(parent.children) >= definition.max_children:
        logger.info("add_child_rejected", parent=parent.id, reason="max_children")
        return _finish("add_child", parent, False, on_change, metrics)

    parent.children.append(new_node)
    return _finish("add_child", parent, True, on_change, metrics)


def delete_child(
    parent: Optional[ComponentNode],
    target_id: str,
    on_change: Optional[ChangeCallback] = None,
    metrics: Optional[MetricsCollector] = None,
) -> bool:
    """Remove the first child with the id."""
    if parent is None or not parent.children:
        return _finish("delete", parent, False, on_change, metrics)

    index = parent.index_of(target_id)
    if index == -1:
        return _finish("delete", parent, False, on_change, metrics)

    del parent.children[index]
    return _finish("delete", parent, True, on_change, metrics)


def duplicate_child(
    parent: Optional[ComponentNode],
    target_id: str,
    on_change: Optional[ChangeCallback] = None,
    metrics: Optional[MetricsCollector] = None,
    id_factory: Callable[[], str] = new_node_id,
) -> Optional[ComponentNode]:
    """
    Deep-clone the child with the id and insert the clone right after it.

    Every node of the clone receives a fresh id, not just its root.

    Returns:
        The inserted clone, or None when nothing was duplicated
    """
    if parent is None or not parent.children:
        _finish("duplicate", parent, False, on_change, metrics)
        return None

    index = parent.index_of(target_id)
    if index == -1:
        _finish("duplicate", parent, False, on_change, metrics)
        return None

    clone = parent.children[index].model_copy(deep=True)
    for node in clone.walk():
        node.id = id_factory()

    parent.children.insert(index + 1, clone)
    _finish("duplicate", parent, True, on_change, metrics)
    return clone


def move_up(
    parent: Optional[ComponentNode],
    target_id: str,
    on_change: Optional[ChangeCallback] = None,
    metrics: Optional[MetricsCollector] = None,
) -> bool:
    """Swap the child with its predecessor; no-op when already first."""
    if parent is None or not parent.children:
        return _finish("move_up", parent, False, on_change, metrics)

    index = parent.index_of(target_id)
    if index <= 0:
        return _finish("move_up", parent, False, on_change, metrics)

    children = parent.children
    children[index - 1], children[index] = children[index], children[index - 1]
    return _finish("move_up", parent, True, on_change, metrics)


def move_down(
    parent: Optional[ComponentNode],
    target_id: str,
    on_change: Optional[ChangeCallback] = None,
    metrics: Optional[MetricsCollector] = None,
) -> bool:
    """Swap the child with its successor; no-op when already last."""
    if parent is None or not parent.children:
        return _finish("move_down", parent, False, on_change, metrics)

    index = parent.index_of(target_id)
    if index == -1 or index >= len(parent.children) - 1:
        return _finish("move_down", parent, False, on_change, metrics)

    children = parent.children
    children[index], children[index + 1] = children[index + 1], children[index]
    return _finish("move_down", parent, True, on_change, metrics)
