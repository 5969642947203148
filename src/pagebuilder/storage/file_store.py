"""
File Page Store
One JSON document per page in a local directory
"""

import re
from pathlib import Path
from typing import List, Optional

from ..components.registry import ComponentRegistry
from ..core.id import new_page_id
from ..core.logging_config import get_logger
from ..core.validate import ValidationError
from ..monitoring import MetricsCollector, metrics_collector
from ..tree.documents import PageDocumentParser, dump_page
from ..tree.models import Page
from .base import PageNotFoundError, PageSummary, PersistenceError

logger = get_logger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


class FilePageStore:
    """
    Stores pages as ``<id>.json`` files.

    Saving a page that still has a temporary id assigns a durable ``pg_`` id.
    Writes go to a sibling temp file first and are then moved into place.
    """

    def __init__(
        self,
        directory: str | Path,
        registry: Optional[ComponentRegistry] = None,
        temp_prefix: str = "page_",
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.temp_prefix = temp_prefix
        self.parser = PageDocumentParser(registry)
        self.metrics = metrics or metrics_collector

        logger.info("file_store_init", directory=str(self.directory))

    def _path(self, page_id: str) -> Optional[Path]:
        if not _SAFE_ID.match(page_id):
            return None
        return self.directory / f"{page_id}.json"

    def load_page(self, page_id: str) -> Page:
        """
        Load a page by id.

        Raises:
            PageNotFoundError: If no document exists for the id
            PersistenceError: If the document cannot be read or parsed
        """
        path = self._path(page_id)
        if path is None or not path.is_file():
            raise PageNotFoundError(page_id)

        try:
            page = self.parser.parse(path.read_bytes())
        except (OSError, ValidationError) as e:
            self.metrics.record_persistence_error("load")
            logger.error("load_failed", page_id=page_id, error=str(e))
            raise PersistenceError(f"Could not load page {page_id}: {e}", "load", e) from e

        logger.debug("page_loaded", page_id=page_id)
        return page

    def save_page(self, page: Page) -> Page:
        """
        Write a page and return the stored copy.

        The given page object is never modified.
        """
        stored = page.snapshot()
        if stored.is_unsaved(self.temp_prefix):
            stored.id = new_page_id()
        stored.touch()

        path = self._path(stored.id)
        if path is None:
            raise PersistenceError(f"Invalid page id: {stored.id!r}", "save")

        tmp_path = path.with_suffix(".json.tmp")
        try:
            tmp_path.write_text(dump_page(stored, indent=2), encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            self.metrics.record_persistence_error("save")
            logger.error("save_failed", page_id=stored.id, error=str(e))
            raise PersistenceError(f"Could not save page {stored.id}: {e}", "save", e) from e

        logger.info("page_saved", page_id=stored.id, previous_id=page.id, path=str(path))
        return stored

    def list_pages(self, owner_id: Optional[str] = None) -> List[PageSummary]:
        """
        List stored pages, most recently updated first.

        Unreadable documents are skipped.
        """
        pages: List[Page] = []
        for path in self.directory.glob("*.json"):
            try:
                page = self.parser.parse(path.read_bytes())
            except (OSError, ValidationError) as e:
                logger.warning("list_skipped_document", path=str(path), error=str(e))
                continue
            if owner_id is None or page.owner_id == owner_id:
                pages.append(page)

        pages.sort(key=lambda p: p.metadata.updated_at, reverse=True)
        return [PageSummary(id=p.id, title=p.title) for p in pages]

    def delete_page(self, page_id: str) -> None:
        """
        Remove a stored page.

        Raises:
            PageNotFoundError: If no document exists for the id
        """
        path = self._path(page_id)
        if path is None or not path.is_file():
            raise PageNotFoundError(page_id, operation="delete")

        try:
            path.unlink()
        except OSError as e:
            self.metrics.record_persistence_error("delete")
            raise PersistenceError(f"Could not delete page {page_id}: {e}", "delete", e) from e

        logger.info("page_deleted", page_id=page_id)
