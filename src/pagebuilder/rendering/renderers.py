"""
Built-in Component Renderers
One renderer per component kind, looked up through the registry.
"""

from typing import Any, Dict

from markupsafe import escape

from ..tree.models import ComponentNode
from .context import RenderContext
from .styles import style_to_css

TEXT_TAGS = frozenset({"p", "h1", "h2", "h3", "h4", "h5", "h6", "span", "blockquote", "pre"})
DEFAULT_TEXT_TAG = "p"

_UNSAFE_URL_SCHEMES = ("javascript:", "vbscript:", "data:text/html")


def render_attributes(attributes: Dict[str, Any]) -> str:
    """
    Serialise attributes in order, skipping empty values.

    Values are HTML-escaped; each attribute is preceded by a space.
    """
    parts = []
    for name, value in attributes.items():
        if value is None or value == "":
            continue
        parts.append(f' {name}="{escape(value)}"')
    return "".join(parts)


def class_names(*names: Any) -> str:
    """Join non-empty class names with single spaces"""
    return " ".join(str(name).strip() for name in names if isinstance(name, str) and name.strip())


def safe_url(value: Any) -> str:
    """Drop URLs with script-capable schemes"""
    if not isinstance(value, str):
        return ""
    url = value.strip()
    if url.lower().replace(" ", "").startswith(_UNSAFE_URL_SCHEMES):
        return ""
    return url


def unknown_component(type_name: str) -> str:
    """HTML comment marking a node whose type cannot be rendered"""
    name = str(escape(type_name)).replace("--", "- -")
    return f"<!-- Unknown component type: {name} -->"


class ContainerRenderer:
    """Block element wrapping the node's children in order"""

    def __init__(self, base_class: str = "wb-container"):
        self.base_class = base_class

    def render(self, node: ComponentNode, ctx: RenderContext) -> str:
        attributes = {
            "class": class_names(self.base_class, node.props.get("className")),
            "style": style_to_css(node.props.get("style")),
            **ctx.editor_attributes(node),
        }
        return f"<div{render_attributes(attributes)}>{ctx.render_children(node)}</div>"


class TextRenderer:
    """Configured text tag with escaped literal content"""

    def __init__(self, default_tag: str = DEFAULT_TEXT_TAG):
        self.default_tag = default_tag

    def tag_for(self, node: ComponentNode) -> str:
        tag = node.props.get("tag")
        if isinstance(tag, str) and tag.lower() in TEXT_TAGS:
            return tag.lower()
        return self.default_tag

    def render(self, node: ComponentNode, ctx: RenderContext) -> str:
        tag = self.tag_for(node)
        content = node.props.get("content")
        text = "" if content is None else escape(content)

        attributes = {
            "class": class_names(node.props.get("className")),
            "style": style_to_css(node.props.get("style")),
            **ctx.editor_attributes(node),
        }
        return f"<{tag}{render_attributes(attributes)}>{text}</{tag}>"


class ImageRenderer:
    """Self-closing image element; alt is always present"""

    def render(self, node: ComponentNode, ctx: RenderContext) -> str:
        alt = node.props.get("alt")
        leading = {
            "class": class_names("wb-image", node.props.get("className")),
            "src": safe_url(node.props.get("src")),
        }
        trailing = {
            "style": style_to_css(node.props.get("style")),
            **ctx.editor_attributes(node),
        }
        alt_text = escape(alt) if isinstance(alt, str) else ""
        return f'<img{render_attributes(leading)} alt="{alt_text}"{render_attributes(trailing)} />'
