"""
Page Store Interface
Persistence collaborator contract and its errors
"""

from typing import List, Optional, Protocol

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..tree.models import Page


class PersistenceError(Exception):
    """A page or asset store failed to complete an operation"""

    def __init__(self, message: str, operation: str = "", original: Exception | None = None) -> None:
        super().__init__(message)
        self.operation = operation
        self.original = original


class PageNotFoundError(PersistenceError):
    """No page is stored under the requested id"""

    def __init__(self, page_id: str, operation: str = "load") -> None:
        super().__init__(f"Page not found: {page_id}", operation=operation)
        self.page_id = page_id


class PageSummary(BaseModel):
    """Listing entry of a stored page"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., validation_alias=AliasChoices("id", "_id"))
    title: str = ""


class PageStore(Protocol):
    """Loads, saves, lists and deletes pages"""

    def load_page(self, page_id: str) -> Page:
        ...

    def save_page(self, page: Page) -> Page:
        """Persist the page; the returned page carries the durable id."""
        ...

    def list_pages(self, owner_id: Optional[str] = None) -> List[PageSummary]:
        ...

    def delete_page(self, page_id: str) -> None:
        ...
