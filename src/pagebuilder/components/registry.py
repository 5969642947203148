"""
Component Registry
Maps type keys to their definitions and renderers
"""

from typing import Dict, List, Optional

from ..core.events import BuilderEvents
from ..core.logging_config import get_logger
from .types import ComponentRenderer, ComponentTypeDefinition

logger = get_logger(__name__)


class ComponentRegistry:
    """
    Registry of component types for one builder instance.
    Registering an existing type key replaces its definition.
    """

    def __init__(self, events: Optional[BuilderEvents] = None):
        self.events = events
        self._definitions: Dict[str, ComponentTypeDefinition] = {}
        self._renderers: Dict[str, ComponentRenderer] = {}
        self._version = 0

    def register(
        self,
        definition: ComponentTypeDefinition,
        renderer: Optional[ComponentRenderer] = None
    ) -> None:
        """
        Insert or replace a component type.

        Args:
            definition: Type definition keyed by its ``type``
            renderer: Optional renderer for the type
        """
        if not definition.type.strip():
            raise ValueError("Component type key must not be empty")

        replaced = definition.type in self._definitions
        self._definitions[definition.type] = definition
        if renderer is not None:
            self._renderers[definition.type] = renderer
        self._version += 1

        logger.info(
            "type_registered",
            type=definition.type,
            category=definition.category,
            fields=len(definition.prop_editors),
            replaced=replaced,
        )

        if self.events:
            self.events.component_registered.publish(definition)

    def register_renderer(self, type_name: str, renderer: ComponentRenderer) -> None:
        """Attach or replace the renderer for a type key"""
        self._renderers[type_name] = renderer
        self._version += 1

    def unregister(self, type_name: str) -> None:
        """Remove a type and its renderer"""
        if type_name in self._definitions:
            del self._definitions[type_name]
            self._renderers.pop(type_name, None)
            self._version += 1
            logger.info("type_unregistered", type=type_name)

    @property
    def version(self) -> int:
        """Counter bumped by every change to definitions or renderers"""
        return self._version

    def get(self, type_name: str) -> Optional[ComponentTypeDefinition]:
        """Get definition by exact type key"""
        return self._definitions.get(type_name)

    def renderer_for(self, type_name: str) -> Optional[ComponentRenderer]:
        """Get the renderer of a registered type"""
        if type_name not in self._definitions:
            return None
        return self._renderers.get(type_name)

    def list_all(self) -> List[ComponentTypeDefinition]:
        """List all definitions in insertion order"""
        return list(self._definitions.values())

    def list_by_category(self) -> Dict[str, List[ComponentTypeDefinition]]:
        """
        Group palette-visible definitions by category.

        Types in the hidden category (the page root) are left out.
        """
        grouped: Dict[str, List[ComponentTypeDefinition]] = {}

        for definition in self._definitions.values():
            if definition.hidden:
                continue
            grouped.setdefault(definition.category, []).append(definition)

        return grouped

    def allows_children(self, type_name: str) -> bool:
        """Whether nodes of the type may hold children"""
        definition = self._definitions.get(type_name)
        return definition.allows_children if definition else False

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)
