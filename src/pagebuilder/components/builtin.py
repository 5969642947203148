"""
Built-in Components
Container, text, image and the hidden page root.
"""

from ..rendering.renderers import ContainerRenderer, ImageRenderer, TextRenderer
from .registry import ComponentRegistry
from .types import (
    HIDDEN_CATEGORY,
    ROOT_TYPE,
    ComponentTypeDefinition,
    EditorKind,
    PropertyFieldDefinition,
    SelectOption,
)

PLACEHOLDER_IMAGE = "https://image-placeholder.com/images/actual-size/320x200.png"
STYLE_GROUP = "Style"

CONTAINER = ComponentTypeDefinition(
    type="container",
    label="Container",
    category="Layout",
    icon="box",
    default_props={
        "style": {
            "padding": "20px",
            "margin": "0px",
            "minHeight": "100px",
            "backgroundColor": "#ffffff",
        },
        "className": "",
    },
    prop_editors=[
        PropertyFieldDefinition(
            path="style.padding", label="Padding", group=STYLE_GROUP, default_value="20px"
        ),
        PropertyFieldDefinition(
            path="style.backgroundColor",
            label="Background color",
            editor=EditorKind.COLOR,
            group=STYLE_GROUP,
            default_value="#ffffff",
        ),
        PropertyFieldDefinition(path="className", label="CSS classes", default_value=""),
    ],
    allows_children=True,
)

TEXT = ComponentTypeDefinition(
    type="text",
    label="Text",
    category="Basic",
    icon="type",
    default_props={
        "content": "Sample text",
        "tag": "p",
        "style": {
            "fontSize": "16px",
            "color": "#333333",
            "fontWeight": "normal",
        },
    },
    prop_editors=[
        PropertyFieldDefinition(path="content", label="Content", default_value="Sample text"),
        PropertyFieldDefinition(
            path="tag",
            label="HTML tag",
            editor=EditorKind.SELECT,
            options=[SelectOption(value="p", label="Paragraph (p)")]
            + [SelectOption(value=f"h{level}", label=f"Heading {level} (h{level})") for level in range(1, 7)],
            default_value="p",
        ),
        PropertyFieldDefinition(
            path="style.fontSize", label="Font size", group=STYLE_GROUP, default_value="16px"
        ),
        PropertyFieldDefinition(
            path="style.color",
            label="Text color",
            editor=EditorKind.COLOR,
            group=STYLE_GROUP,
            default_value="#333333",
        ),
        PropertyFieldDefinition(
            path="style.fontWeight",
            label="Font weight",
            editor=EditorKind.SELECT,
            group=STYLE_GROUP,
            options=[
                SelectOption(value="normal", label="Normal"),
                SelectOption(value="bold", label="Bold"),
                SelectOption(value="300", label="Light (300)"),
                SelectOption(value="500", label="Medium (500)"),
                SelectOption(value="700", label="Bold (700)"),
            ],
            default_value="normal",
        ),
    ],
)

IMAGE = ComponentTypeDefinition(
    type="image",
    label="Image",
    category="Basic",
    icon="image",
    default_props={
        "src": PLACEHOLDER_IMAGE,
        "alt": "Sample image",
        "style": {
            "width": "100%",
            "height": "auto",
        },
    },
    prop_editors=[
        PropertyFieldDefinition(
            path="src", label="Image URL", editor=EditorKind.IMAGE, default_value=PLACEHOLDER_IMAGE
        ),
        PropertyFieldDefinition(path="alt", label="Alternative text", default_value="Sample image"),
        PropertyFieldDefinition(
            path="style.maxWidth", label="Max width", group=STYLE_GROUP, default_value="100%"
        ),
    ],
)

ROOT_CONTAINER = ComponentTypeDefinition(
    type=ROOT_TYPE,
    label="Container",
    category=HIDDEN_CATEGORY,
    icon="box",
    allows_children=True,
)

BASE_COMPONENTS = (CONTAINER, TEXT, IMAGE, ROOT_CONTAINER)


def register_base_components(registry: ComponentRegistry) -> None:
    """Register the built-in types together with their renderers"""
    registry.register(CONTAINER, ContainerRenderer())
    registry.register(TEXT, TextRenderer())
    registry.register(IMAGE, ImageRenderer())
    registry.register(ROOT_CONTAINER, ContainerRenderer(base_class="wb-container wb-root"))
