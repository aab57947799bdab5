"""Data models for lastmod."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DocumentMetadata(BaseModel):
    """Metadata extracted from post front matter."""

    model_config = ConfigDict(extra="allow")

    title: str | None = None
    date: datetime | None = None
    tags: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)


class Revision(BaseModel):
    """A single commit touching a path."""

    model_config = ConfigDict(frozen=True)

    path: str
    commit: str
    timestamp: datetime


class Document(BaseModel):
    """Represents a blog post read from storage.

    ``last_modified_at`` and ``revision_count`` are computed during a render
    pass and are never written back to the source file.
    """

    path: str
    slug: str
    content: str
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    created_at: datetime | None = None
    last_modified_at: datetime | None = None
    revision_count: int = 0

    @property
    def title(self) -> str:
        """Return title from metadata or derive from slug."""
        return self.metadata.title or self.slug.replace("-", " ").capitalize()

    @property
    def modified(self) -> datetime | None:
        """Last-modified date, falling back to the creation date."""
        return self.last_modified_at or self.created_at
