"""
Components
Type definitions, the registry and the built-in component set
"""

from .types import (
    DEFAULT_GROUP,
    HIDDEN_CATEGORY,
    ROOT_TYPE,
    ComponentRenderer,
    ComponentTypeDefinition,
    EditorKind,
    PropertyFieldDefinition,
    SelectOption,
)
from .registry import ComponentRegistry
from .builtin import BASE_COMPONENTS, register_base_components

__all__ = [
    "DEFAULT_GROUP",
    "HIDDEN_CATEGORY",
    "ROOT_TYPE",
    "ComponentRenderer",
    "ComponentTypeDefinition",
    "EditorKind",
    "PropertyFieldDefinition",
    "SelectOption",
    "ComponentRegistry",
    "BASE_COMPONENTS",
    "register_base_components",
]
