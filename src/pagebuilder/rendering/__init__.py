"""
Rendering
Component trees to HTML documents
"""

from .context import RenderContext, RenderOptions
from .engine import RenderEngine, minify_shell
from .renderers import ContainerRenderer, ImageRenderer, TextRenderer, unknown_component
from .styles import BASE_STYLESHEET, style_to_css

__all__ = [
    "RenderContext",
    "RenderOptions",
    "RenderEngine",
    "minify_shell",
    "ContainerRenderer",
    "ImageRenderer",
    "TextRenderer",
    "unknown_component",
    "BASE_STYLESHEET",
    "style_to_css",
]
