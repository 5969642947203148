"""
Plugins
Builder extensions
"""

from .manager import BasePlugin, BuilderContext, Plugin, PluginManager

__all__ = [
    "BasePlugin",
    "BuilderContext",
    "Plugin",
    "PluginManager",
]
