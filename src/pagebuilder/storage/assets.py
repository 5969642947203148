"""
Asset Store
Validates and stores uploaded files, returning public URLs for them.
"""

import re
from pathlib import Path, PurePath
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..core.id import new_asset_id
from ..core.logging_config import get_logger
from ..monitoring import MetricsCollector, metrics_collector
from .base import PersistenceError

logger = get_logger(__name__)

ALLOWED_CONTENT_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/svg+xml",
    "image/webp",
    "application/pdf",
    "text/css",
    "application/javascript",
})

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class AssetRejectedError(PersistenceError):
    """Upload refused: empty, too large or of a disallowed content type"""

    def __init__(self, message: str) -> None:
        super().__init__(message, operation="upload")


class AssetNotFoundError(PersistenceError):
    """No stored asset has the requested filename"""

    def __init__(self, filename: str) -> None:
        super().__init__(f"Asset not found: {filename}", operation="delete")
        self.filename = filename


class UploadedAsset(BaseModel):
    """Result of a successful upload"""

    model_config = ConfigDict(frozen=True)

    url: str
    filename: str
    original_name: str
    content_type: str
    size: int


def sanitize_filename(name: str) -> str:
    """Base name reduced to URL- and filesystem-safe characters"""
    base = PurePath(name.replace("\\", "/")).name
    cleaned = _UNSAFE_NAME_CHARS.sub("-", base).strip(".-")
    return cleaned or "file"


class AssetStore:
    """Stores uploads as ``<asset id>-<name>`` files under one directory"""

    def __init__(
        self,
        upload_dir: str | Path,
        public_base_url: str = "http://localhost:5000",
        max_size: int = 10 * 1024 * 1024,
        url_path: Optional[str] = None,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self.upload_dir = Path(upload_dir)
        self.public_base_url = public_base_url.rstrip("/")
        self.max_size = max_size
        self.url_path = (url_path or self.upload_dir.name).strip("/")
        self.metrics = metrics or metrics_collector

    def upload(self, data: bytes, filename: str, content_type: str) -> UploadedAsset:
        """
        Validate and store one file.

        Args:
            data: File contents
            filename: Name supplied by the client
            content_type: Declared MIME type

        Returns:
            Stored asset with its absolute URL

        Raises:
            AssetRejectedError: If the file is empty, too large or not allowed
            PersistenceError: If the file cannot be written
        """
        mime = content_type.split(";", 1)[0].strip().lower()
        if mime not in ALLOWED_CONTENT_TYPES:
            logger.warning("upload_rejected", reason="content_type", content_type=content_type)
            raise AssetRejectedError(f"File type not allowed: {content_type}")
        if not data:
            raise AssetRejectedError("No file uploaded")
        if len(data) > self.max_size:
            logger.warning("upload_rejected", reason="size", size=len(data), max_size=self.max_size)
            raise AssetRejectedError(f"File exceeds maximum size of {self.max_size} bytes")

        stored_name = f"{new_asset_id()}-{sanitize_filename(filename)}"
        path = self.upload_dir / stored_name

        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            self.metrics.record_persistence_error("upload")
            logger.error("upload_failed", filename=stored_name, error=str(e))
            raise PersistenceError(f"Could not store {filename}: {e}", "upload", e) from e

        asset = UploadedAsset(
            url=f"{self.public_base_url}/{self.url_path}/{stored_name}",
            filename=stored_name,
            original_name=filename,
            content_type=mime,
            size=len(data),
        )
        logger.info("asset_uploaded", filename=stored_name, content_type=mime, size=asset.size)
        return asset

    def path_for(self, filename: str) -> Path:
        """
        Location of a stored asset.

        Raises:
            AssetNotFoundError: If the name is not a stored asset
        """
        if sanitize_filename(filename) != filename:
            raise AssetNotFoundError(filename)
        path = self.upload_dir / filename
        if not path.is_file():
            raise AssetNotFoundError(filename)
        return path

    def delete(self, filename: str) -> None:
        path = self.path_for(filename)
        try:
            path.unlink()
        except OSError as e:
            self.metrics.record_persistence_error("delete")
            raise PersistenceError(f"Could not delete {filename}: {e}", "delete", e) from e
        logger.info("asset_deleted", filename=filename)
