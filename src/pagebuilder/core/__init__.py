"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .validate import (
    MAX_PAGE_DOCUMENT_SIZE,
    MAX_TREE_DEPTH,
    PageDocumentValidator,
    ValidationError,
    ValidationResult,
)
from .logging_config import configure_from_settings, configure_logging, get_logger, LogContext
from .json import (
    loads_object,
    safe_json_dumps,
    JSONParseError,
    validate_json_size,
    validate_json_depth,
)
from .hash import Algorithm, hash_string, hash_fields
from .cache import LRUCache, Stats
from .events import BuilderEvents, EventChannel
from .id import new_asset_id, new_node_id, new_page_id, new_temp_page_id


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "MAX_PAGE_DOCUMENT_SIZE",
    "MAX_TREE_DEPTH",
    "PageDocumentValidator",
    "ValidationError",
    "ValidationResult",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "LogContext",
    # JSON
    "loads_object",
    "safe_json_dumps",
    "JSONParseError",
    "validate_json_size",
    "validate_json_depth",
    # DI
    "create_container",
    # Hashing
    "Algorithm",
    "hash_string",
    "hash_fields",
    # Caching
    "LRUCache",
    "Stats",
    # Events
    "BuilderEvents",
    "EventChannel",
    # IDs
    "new_asset_id",
    "new_node_id",
    "new_page_id",
    "new_temp_page_id",
]
