"""Component Tree Model - node creation and lookup through the registry."""

import copy
from typing import Any, Callable, Iterator, Optional

from ..components.registry import ComponentRegistry
from ..components.types import ROOT_TYPE
from ..core.events import BuilderEvents
from ..core.id import new_node_id, new_temp_page_id
from ..core.logging_config import get_logger
from ..monitoring import MetricsCollector, metrics_collector
from .models import ComponentNode, Page, PageMetadata

logger = get_logger(__name__)

ROOT_STYLE = {"minHeight": "100vh", "padding": "20px", "backgroundColor": "#ffffff"}


def walk(tree: ComponentNode) -> Iterator[ComponentNode]:
    """Depth-first pre-order traversal."""
    return tree.walk()


def find_node(tree: ComponentNode, node_id: str) -> Optional[ComponentNode]:
    """First node in pre-order with the id, or None."""
    return tree.find(node_id)


def find_parent(tree: ComponentNode, node_id: str) -> Optional[ComponentNode]:
    """Parent of the node with the id; None for the root or a missing id."""
    for node in tree.walk():
        if node.index_of(node_id) != -1:
            return node
    return None


class TreeModel:
    """Creates component nodes from registered type definitions."""

    def __init__(
        self,
        registry: ComponentRegistry,
        events: Optional[BuilderEvents] = None,
        id_factory: Callable[[], str] = new_node_id,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self.registry = registry
        self.events = events
        self.id_factory = id_factory
        self.metrics = metrics or metrics_collector

    def create_node(
        self,
        type_name: str,
        override_props: Optional[dict[str, Any]] = None,
    ) -> Optional[ComponentNode]:
        """
        Create a node of a registered type.

        Defaults and overrides are merged one level deep: an override at a
        key such as ``style`` replaces the default object wholesale.

        Args:
            type_name: Registry type key
            override_props: Properties replacing defaults at the same key

        Returns:
            The new childless node, or None when the type is unknown
        """
        definition = self.registry.get(type_name)
        if definition is None:
            logger.warning("unknown_type", type=type_name)
            return None

        props = copy.deepcopy(definition.default_props)
        props.update(copy.deepcopy(override_props or {}))

        node = ComponentNode(
            id=self.id_factory(),
            type=type_name,
            label=definition.label,
            props=props,
            children=[],
        )

        self.metrics.record_node_created(type_name)
        logger.debug("node_created", id=node.id, type=type_name)

        if self.events:
            self.events.node_created.publish(node)

        return node

    def find_node(self, tree: ComponentNode, node_id: str) -> Optional[ComponentNode]:
        return find_node(tree, node_id)

    def find_parent(self, tree: ComponentNode, node_id: str) -> Optional[ComponentNode]:
        return find_parent(tree, node_id)

    def reassign_ids(self, subtree: ComponentNode) -> None:
        """Give every node of the subtree a freshly generated id."""
        for node in subtree.walk():
            node.id = self.id_factory()

    def new_page(
        self,
        title: str = "New Page",
        temp_prefix: str = "page_",
        owner_id: Optional[str] = None,
    ) -> Page:
        """
        Create an unsaved draft page anchored on a fresh root node.

        Raises:
            LookupError: If the root type is not registered
        """
        root = self.create_node(ROOT_TYPE, {"style": dict(ROOT_STYLE)})
        if root is None:
            raise LookupError(f"Root component type '{ROOT_TYPE}' is not registered")

        page = Page(
            id=new_temp_page_id(temp_prefix),
            title=title,
            root=root,
            metadata=PageMetadata(
                description="A page created with the page builder",
                keywords="web, builder",
            ),
            owner_id=owner_id,
        )
        logger.info("page_created", page_id=page.id, slug=page.slug)
        return page
