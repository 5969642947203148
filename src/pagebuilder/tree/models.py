"""Page and component tree data models."""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterator

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..core.id import is_temporary_page_id

_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Derive a URL slug: lowercase, non-alphanumeric runs collapsed to one hyphen, trimmed."""
    return _SLUG_SEPARATORS.sub("-", title.lower()).strip("-")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ComponentNode(BaseModel):
    """One element of a page's component tree."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, description="Unique within the page tree")
    type: str = Field(..., min_length=1, description="Registry type key")
    label: str = Field(default="", description="Copy of the type label, may diverge")
    props: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("props", "properties"),
    )
    children: list["ComponentNode"] = Field(default_factory=list)

    @field_validator("props", "children", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any, info: Any) -> Any:
        if v is None:
            return {} if info.field_name == "props" else []
        return v

    def walk(self) -> Iterator["ComponentNode"]:
        """Yield this node and every descendant, depth-first pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, node_id: str) -> "ComponentNode | None":
        """First node in pre-order whose id matches."""
        for node in self.walk():
            if node.id == node_id:
                return node
        return None

    def index_of(self, node_id: str) -> int:
        """Position of the direct child with the id, or -1."""
        for index, child in enumerate(self.children):
            if child.id == node_id:
                return index
        return -1


class PageStatus(str, Enum):
    """Publication state of a page"""
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class PageMetadata(BaseModel):
    """Descriptive metadata and timestamps of a page."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    description: str = ""
    keywords: str = ""
    author: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    published_at: datetime | None = None


class Page(BaseModel):
    """A page and the component tree it exclusively owns."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., min_length=1)
    title: str
    slug: str = ""
    status: PageStatus = PageStatus.DRAFT
    root: ComponentNode = Field(..., alias="rootComponent")
    metadata: PageMetadata = Field(default_factory=PageMetadata)
    owner_id: str | None = None

    @model_validator(mode="after")
    def _derive_slug(self) -> "Page":
        if not self.slug:
            self.slug = slugify(self.title)
        return self

    def rename(self, title: str) -> None:
        """Set the title and re-derive the slug from it."""
        self.title = title
        self.slug = slugify(title)
        self.touch()

    def touch(self) -> None:
        self.metadata.updated_at = utc_now()

    def publish(self) -> None:
        """Mark as published; the first publication time is kept."""
        self.status = PageStatus.PUBLISHED
        if self.metadata.published_at is None:
            self.metadata.published_at = utc_now()
        self.touch()

    def archive(self) -> None:
        self.status = PageStatus.ARCHIVED
        self.touch()

    def is_unsaved(self, temp_prefix: str = "page_") -> bool:
        """Whether the page still carries a client-side temporary id."""
        return is_temporary_page_id(self.id, temp_prefix)

    def to_document(self) -> dict[str, Any]:
        """Serialized form used by stores and the render cache."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Page":
        return cls.model_validate(document)

    def snapshot(self) -> "Page":
        """Deep copy that later edits to this page cannot reach."""
        return self.model_copy(deep=True)


ComponentNode.model_rebuild()
