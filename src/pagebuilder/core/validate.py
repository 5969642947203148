"""Validation errors, limits and page document checks."""

from dataclasses import dataclass
from typing import Any

from .json import JSONParseError, validate_json_depth as _check_depth, validate_json_size as _check_size


# Validation limits
MAX_PAGE_DOCUMENT_SIZE = 2 * 1024 * 1024  # 2MB
MAX_TREE_DEPTH = 64


class ValidationError(Exception):
    """Validation failed."""

    pass


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


class PageDocumentValidator:
    """Validates serialized page documents before they become models."""

    @staticmethod
    def validate(document: dict[str, Any], raw: str | bytes | None = None) -> None:
        """
        Validate a page document comprehensively.

        Args:
            document: Parsed page dictionary
            raw: Original JSON text, when available

        Raises:
            ValidationError: If validation fails
        """
        try:
            if raw is not None:
                _check_size(raw, MAX_PAGE_DOCUMENT_SIZE, "Page document")
            _check_depth(document, MAX_TREE_DEPTH)
        except JSONParseError as e:
            raise ValidationError(str(e)) from e

        if not document.get("title"):
            raise ValidationError("Page document missing required 'title' field")

        root = document.get("rootComponent")
        if not isinstance(root, dict):
            raise ValidationError("Page document missing required 'rootComponent' object")

        PageDocumentValidator.validate_node(root, "rootComponent")

    @staticmethod
    def validate_node(node: Any, path: str) -> None:
        """Check the required keys of a node and, recursively, its children."""
        if not isinstance(node, dict):
            raise ValidationError(f"{path} must be an object")
        for key in ("id", "type"):
            if not isinstance(node.get(key), str) or not node.get(key):
                raise ValidationError(f"{path}.{key} is required")

        children = node.get("children") or []
        if not isinstance(children, list):
            raise ValidationError(f"{path}.children must be a list")
        for index, child in enumerate(children):
            PageDocumentValidator.validate_node(child, f"{path}.children[{index}]")

