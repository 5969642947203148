"""
pagebuilder
Component-tree page builder with server-side HTML rendering.
"""

from .core import Settings, configure_from_settings, configure_logging, create_container, get_settings
from .components import (
    ComponentRegistry,
    ComponentTypeDefinition,
    EditorKind,
    PropertyFieldDefinition,
    register_base_components,
)
from .tree import ComponentNode, Page, TreeModel
from .rendering import RenderEngine, RenderOptions
from .editor import EditorSession

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "configure_logging",
    "configure_from_settings",
    "create_container",
    "get_settings",
    "ComponentRegistry",
    "ComponentTypeDefinition",
    "EditorKind",
    "PropertyFieldDefinition",
    "register_base_components",
    "ComponentNode",
    "Page",
    "TreeModel",
    "RenderEngine",
    "RenderOptions",
    "EditorSession",
]
