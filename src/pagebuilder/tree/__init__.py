"""
Component Tree
Nodes, pages, creation through the registry and structural mutations
"""

from .models import ComponentNode, Page, PageMetadata, PageStatus, slugify
from .builder import TreeModel, find_node, find_parent, walk
from .operations import add_child, delete_child, duplicate_child, move_down, move_up
from .documents import PageDocumentParser, dump_page, parse_page

__all__ = [
    "ComponentNode",
    "Page",
    "PageMetadata",
    "PageStatus",
    "slugify",
    "TreeModel",
    "find_node",
    "find_parent",
    "walk",
    "add_child",
    "delete_child",
    "duplicate_child",
    "move_up",
    "move_down",
    "PageDocumentParser",
    "dump_page",
    "parse_page",
]
