"""Render options and the per-render context handed to component renderers."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict

from pydantic import BaseModel, ConfigDict

from ..tree.models import ComponentNode

if TYPE_CHECKING:
    from .engine import RenderEngine


class RenderOptions(BaseModel):
    """Options controlling a page render."""

    model_config = ConfigDict(frozen=True)

    include_editor_metadata: bool = False  # data-component-* attributes, live preview only
    optimize_for_production: bool = False  # minified document shell
    add_scripts: bool = True  # trailing bootstrap script block


@dataclass(frozen=True)
class RenderContext:
    """What a component renderer may use while rendering one node."""

    engine: "RenderEngine"
    options: RenderOptions

    def render_children(self, node: ComponentNode) -> str:
        """Concatenated rendering of the node's children, in order."""
        return "".join(self.engine.render_node(child, self.options) for child in node.children)

    def editor_attributes(self, node: ComponentNode) -> Dict[str, str]:
        if not self.options.include_editor_metadata:
            return {}
        return {"data-component-id": node.id, "data-component-type": node.type}
