"""
Plugin System
Extensions that register components and react to builder events
"""

from typing import Any, Callable, Dict, List, Optional, Protocol, TypeVar, runtime_checkable

from ..components.registry import ComponentRegistry
from ..components.types import ComponentRenderer, ComponentTypeDefinition
from ..core.events import BuilderEvents, EventChannel, Unsubscribe
from ..core.logging_config import get_logger
from ..tree.builder import TreeModel
from ..tree.models import ComponentNode, Page

logger = get_logger(__name__)

T = TypeVar("T")


class BuilderContext:
    """
    What a plugin may touch: the registry, node creation, events and the
    page currently open in the editor.
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        tree: TreeModel,
        events: BuilderEvents,
        current_page: Optional[Callable[[], Optional[Page]]] = None,
    ) -> None:
        self.registry = registry
        self.tree = tree
        self.events = events
        self._current_page = current_page or (lambda: None)

    def register_component(
        self, definition: ComponentTypeDefinition, renderer: Optional[ComponentRenderer] = None
    ) -> None:
        self.registry.register(definition, renderer)

    def create_node(self, type_name: str, override_props: Optional[Dict[str, Any]] = None) -> Optional[ComponentNode]:
        return self.tree.create_node(type_name, override_props)

    def subscribe(self, channel: EventChannel[T], handler: Callable[[T], None]) -> Unsubscribe:
        return channel.subscribe(handler)

    def current_page(self) -> Page:
        """
        The page open in the editor.

        Raises:
            LookupError: If no page is open
        """
        page = self._current_page()
        if page is None:
            raise LookupError("No page is currently open")
        return page


@runtime_checkable
class Plugin(Protocol):
    """Builder extension"""

    id: str
    name: str
    version: str

    def initialize(self, context: BuilderContext) -> None:
        ...

    def destroy(self) -> None:
        ...


class BasePlugin:
    """
    Convenience base: keeps the context and every event subscription made
    through ``subscribe`` and drops them all on destroy.
    """

    id: str = ""
    name: str = ""
    version: str = "0.1.0"

    def __init__(self) -> None:
        self.context: Optional[BuilderContext] = None
        self._subscriptions: List[Unsubscribe] = []

    def initialize(self, context: BuilderContext) -> None:
        self.context = context
        self.on_initialize(context)

    def destroy(self) -> None:
        self.on_destroy()
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions.clear()
        self.context = None

    def subscribe(self, channel: EventChannel[T], handler: Callable[[T], None]) -> None:
        self._subscriptions.append(channel.subscribe(handler))

    def on_initialize(self, context: BuilderContext) -> None:
        """Hook for subclasses"""

    def on_destroy(self) -> None:
        """Hook for subclasses"""


class PluginManager:
    """Registers, initialises and tears down plugins by id"""

    def __init__(self, context: BuilderContext) -> None:
        self.context = context
        self._plugins: Dict[str, Plugin] = {}

    def register_plugin(self, plugin: Plugin) -> bool:
        """
        Initialise and register a plugin.

        A plugin with the same id is destroyed and replaced. A plugin whose
        initialisation raises is logged and left unregistered.

        Returns:
            True if the plugin was registered
        """
        if not plugin.id:
            raise ValueError("Plugin id must not be empty")

        if plugin.id in self._plugins:
            self.unregister_plugin(plugin.id)

        try:
            plugin.initialize(self.context)
        except Exception as e:
            logger.error("plugin_init_failed", plugin=plugin.id, error=str(e), exc_info=True)
            return False

        self._plugins[plugin.id] = plugin
        logger.info("plugin_registered", plugin=plugin.id, name=plugin.name, version=plugin.version)
        self.context.events.plugin_registered.publish(plugin.id)
        return True

    def unregister_plugin(self, plugin_id: str) -> bool:
        """Destroy and remove a plugin; False if it was not registered"""
        plugin = self._plugins.pop(plugin_id, None)
        if plugin is None:
            return False

        try:
            plugin.destroy()
        except Exception as e:
            logger.error("plugin_destroy_failed", plugin=plugin_id, error=str(e), exc_info=True)

        logger.info("plugin_unregistered", plugin=plugin_id)
        self.context.events.plugin_unregistered.publish(plugin_id)
        return True

    def get_plugin(self, plugin_id: str) -> Optional[Plugin]:
        return self._plugins.get(plugin_id)

    def list_plugins(self) -> List[Plugin]:
        return list(self._plugins.values())

    def shutdown(self) -> None:
        """Destroy every registered plugin"""
        for plugin_id in list(self._plugins):
            self.unregister_plugin(plugin_id)
