"""
Property Editing Model
Editable fields of a node and dotted-path reads/writes of its properties.

Paths are split on the first dot only: ``style.color`` addresses the
``color`` key of the ``style`` object. Deeper paths are not supported.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence

from ..components.registry import ComponentRegistry
from ..components.types import DEFAULT_GROUP, PropertyFieldDefinition
from ..core.logging_config import get_logger
from ..core.validate import ValidationError
from ..tree.models import ComponentNode

logger = get_logger(__name__)

PropertyValues = Mapping[str, Any]


def _props_of(source: ComponentNode | PropertyValues) -> PropertyValues:
    return source.props if isinstance(source, ComponentNode) else source


def split_path(path: str) -> tuple[str, Optional[str]]:
    """Split a property path into (parent, child); child is None for top-level keys."""
    if "." not in path:
        return path, None
    parent, child = path.split(".", 1)
    return parent, child


def editable_fields_for(
    registry: ComponentRegistry, node: ComponentNode
) -> Optional[List[PropertyFieldDefinition]]:
    """
    Fields declared by the node's type, in declaration order.

    Returns:
        The fields, or None when the node's type is not registered
    """
    definition = registry.get(node.type)
    if definition is None:
        return None
    return list(definition.prop_editors)


def group_fields(
    fields: Optional[Sequence[PropertyFieldDefinition]],
) -> Dict[str, List[PropertyFieldDefinition]]:
    """
    Group fields by their group name, keeping field order within a group.

    Fields without a group fall into "General". No fields gives an empty mapping.
    """
    groups: Dict[str, List[PropertyFieldDefinition]] = {}
    for field in fields or []:
        groups.setdefault(field.group or DEFAULT_GROUP, []).append(field)
    return groups


def current_value(source: ComponentNode | PropertyValues, path: str) -> Any:
    """
    Read a property by path.

    Missing keys (and null values) read as "" so the result can go straight
    into a text input. Paths nested deeper than two levels read as "".
    """
    props = _props_of(source)
    parent, child = split_path(path)

    if child is None:
        value = props.get(parent)
        return "" if value is None else value

    nested = props.get(parent)
    if not isinstance(nested, Mapping):
        return ""
    value = nested.get(child)
    return "" if value is None else value


def set_value(source: ComponentNode | PropertyValues, path: str, value: Any) -> Dict[str, Any]:
    """
    Return a copy of the properties with the value written at the path.

    For ``parent.child`` the parent object is shallow-copied so sibling keys
    survive. The input mapping is never modified.

    Raises:
        ValidationError: If the path is nested deeper than two levels
    """
    props = dict(_props_of(source))
    parent, child = split_path(path)

    if child is None:
        props[parent] = value
        return props

    if "." in child:
        logger.warning("unsupported_property_path", path=path)
        raise ValidationError(f"Property path '{path}' is nested deeper than two levels")

    existing = props.get(parent)
    nested = dict(existing) if isinstance(existing, Mapping) else {}
    nested[child] = value
    props[parent] = nested
    return props
