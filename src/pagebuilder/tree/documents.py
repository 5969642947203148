"""Page Document Codec - JSON page documents to Page models with validation."""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError as ModelValidationError

from ..components.registry import ComponentRegistry
from ..core.json import JSONParseError, loads_object, safe_json_dumps
from ..core.logging_config import get_logger
from ..core.validate import PageDocumentValidator, ValidationError
from .models import Page

logger = get_logger(__name__)


class PageDocumentParser:
    """Parses stored page documents into Page models"""

    def __init__(self, registry: Optional[ComponentRegistry] = None):
        self.registry = registry

    def parse(self, content: str | bytes) -> Page:
        """
        Parse a JSON page document.

        Args:
            content: JSON text as written by ``dump_page``

        Returns:
            Page model

        Raises:
            ValidationError: If the document is malformed
        """
        try:
            document = loads_object(content)
        except JSONParseError as e:
            logger.error("json_parse_failed", error=str(e))
            raise ValidationError(f"Invalid JSON: {e}") from e

        PageDocumentValidator.validate(document, content)
        return self.from_dict(document)

    def from_dict(self, document: Dict[str, Any]) -> Page:
        """Build a Page from an already decoded document."""
        normalized = dict(document)
        normalized["rootComponent"] = self._expand_node(document["rootComponent"])

        try:
            return Page.from_document(normalized)
        except ModelValidationError as e:
            logger.error("invalid_page_document", errors=e.error_count())
            raise ValidationError(f"Invalid page document: {e}") from e

    def _expand_node(self, node: Dict[str, Any]) -> Dict[str, Any]:
        """
        Normalize one stored node and, recursively, its children.

        Supports:
        - ``properties`` as a synonym of ``props``
        - missing or null ``children`` -> []
        - missing or null ``label`` -> registry label, else the capitalized type;
          an empty label is kept as stored
        """
        props = node.get("props", node.get("properties")) or {}
        children: List[Dict[str, Any]] = node.get("children") or []

        label = node.get("label")
        if label is None:
            definition = self.registry.get(node["type"]) if self.registry else None
            label = definition.label if definition else node["type"].capitalize()

        return {
            "id": node["id"],
            "type": node["type"],
            "label": label,
            "props": props,
            "children": [self._expand_node(child) for child in children],
        }


def dump_page(page: Page, indent: int = 0) -> str:
    """Serialize a page to its JSON document form."""
    return safe_json_dumps(page.to_document(), indent=indent)


def parse_page(content: str | bytes, registry: Optional[ComponentRegistry] = None) -> Page:
    """
    Convenience function to parse a page document

    Args:
        content: Page document JSON
        registry: Optional registry used to fill missing labels

    Returns:
        Page model
    """
    return PageDocumentParser(registry).parse(content)
