"""
Component Type Definitions
Registry entries describing what a component is and how it is edited.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ..rendering.context import RenderContext
    from ..tree.models import ComponentNode


DEFAULT_GROUP = "General"
HIDDEN_CATEGORY = "main"
ROOT_TYPE = "container-root"


class EditorKind(str, Enum):
    """UI control category governing a field's input and validation rule."""
    TEXT = "text"
    NUMBER = "number"
    COLOR = "color"
    SELECT = "select"
    TOGGLE = "toggle"
    IMAGE = "image"


class SelectOption(BaseModel):
    """Value/label pair offered by a select editor"""
    model_config = ConfigDict(frozen=True)

    value: Any
    label: str


class PropertyFieldDefinition(BaseModel):
    """Editable field of a component type"""
    model_config = ConfigDict(frozen=True)

    path: str = Field(..., min_length=1, description="Property path, dotted for nested keys")
    label: str
    editor: EditorKind = Field(default=EditorKind.TEXT)
    group: str | None = Field(default=None, description="Visual group, General when unset")
    min: float | None = None
    max: float | None = None
    step: float | None = None
    options: list[SelectOption] = Field(default_factory=list)
    required: bool = False
    description: str = ""
    default_value: Any = None


class ComponentTypeDefinition(BaseModel):
    """Component type configuration"""
    model_config = ConfigDict(frozen=True)

    type: str = Field(..., min_length=1, description="Unique type key")
    label: str
    category: str = Field(default="General", description="Palette grouping")
    icon: str = ""
    description: str = ""
    default_props: dict[str, Any] = Field(default_factory=dict)
    prop_editors: list[PropertyFieldDefinition] = Field(default_factory=list)
    allows_children: bool = False
    max_children: int | None = Field(default=None, ge=0)

    @property
    def hidden(self) -> bool:
        """Whether the type is kept out of palette listings"""
        return self.category == HIDDEN_CATEGORY


class ComponentRenderer(Protocol):
    """Renders one node of a registered type to an HTML fragment"""

    def render(self, node: "ComponentNode", ctx: "RenderContext") -> str:
        ...
