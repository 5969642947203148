"""
Editor
Editing sessions and per-page locking
"""

from .locks import PageLocks
from .session import PREVIEW_OPTIONS, EditorSession

__all__ = [
    "PageLocks",
    "PREVIEW_OPTIONS",
    "EditorSession",
]
