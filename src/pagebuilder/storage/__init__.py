"""
Storage
Page persistence and asset upload collaborators
"""

from .base import PageNotFoundError, PageStore, PageSummary, PersistenceError
from .file_store import FilePageStore
from .http_store import HttpPageStore
from .assets import (
    ALLOWED_CONTENT_TYPES,
    AssetNotFoundError,
    AssetRejectedError,
    AssetStore,
    UploadedAsset,
    sanitize_filename,
)

__all__ = [
    "PageNotFoundError",
    "PageStore",
    "PageSummary",
    "PersistenceError",
    "FilePageStore",
    "HttpPageStore",
    "ALLOWED_CONTENT_TYPES",
    "AssetNotFoundError",
    "AssetRejectedError",
    "AssetStore",
    "UploadedAsset",
    "sanitize_filename",
]
