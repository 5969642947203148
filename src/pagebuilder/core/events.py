"""Typed publish/subscribe channels for builder events.

Each well-known event has its own channel object, so subscribers bind to an
attribute rather than a string name.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from .logging_config import get_logger

if TYPE_CHECKING:
    from ..components.types import ComponentTypeDefinition
    from ..tree.models import ComponentNode, Page

logger = get_logger(__name__)

T = TypeVar("T")

Unsubscribe = Callable[[], None]


class EventChannel(Generic[T]):
    """Synchronous channel delivering one payload type to its subscribers in order."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: list[Callable[[T], None]] = []

    def subscribe(self, handler: Callable[[T], None]) -> Unsubscribe:
        """
        Register a handler.

        Returns:
            Callable that removes the handler again
        """
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def publish(self, payload: T) -> None:
        """Invoke every handler with the payload."""
        for handler in list(self._handlers):
            handler(payload)

    def __len__(self) -> int:
        return len(self._handlers)


@dataclass
class BuilderEvents:
    """The builder's event channels."""

    component_registered: "EventChannel[ComponentTypeDefinition]" = field(
        default_factory=lambda: EventChannel("component_registered")
    )
    node_created: "EventChannel[ComponentNode]" = field(
        default_factory=lambda: EventChannel("node_created")
    )
    tree_changed: "EventChannel[ComponentNode]" = field(
        default_factory=lambda: EventChannel("tree_changed")
    )
    page_changed: "EventChannel[Page]" = field(
        default_factory=lambda: EventChannel("page_changed")
    )
    plugin_registered: "EventChannel[str]" = field(
        default_factory=lambda: EventChannel("plugin_registered")
    )
    plugin_unregistered: "EventChannel[str]" = field(
        default_factory=lambda: EventChannel("plugin_unregistered")
    )
