"""Read-only storage for blog posts."""

import logging
import re
from abc import ABC, abstractmethod
from datetime import date, datetime, time
from pathlib import Path

import yaml
from pydantic import ValidationError

from lastmod.core.models import Document, DocumentMetadata

logger = logging.getLogger(__name__)

# Jekyll writes "2024-01-05 10:00:00 +0100", which YAML leaves as a string
DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M %z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
)


def _coerce_date(value) -> datetime | None:
    """Convert a front matter ``date`` value to a datetime, or None."""
    if isinstance(value, datetime):
        return value
    # YAML yields a plain date for "date: 2024-01-05"
    if isinstance(value, date):
        return datetime.combine(value, time())
    if not isinstance(value, str):
        return None
    text = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


class DocumentStorage(ABC):
    """Abstract base class for post storage."""

    @abstractmethod
    def get_document(self, slug: str) -> Document | None:
        """Get a post by slug. Returns None if not found."""
        ...

    @abstractmethod
    def list_documents(self) -> list[Document]:
        """List all posts, newest first."""
        ...

    @abstractmethod
    def document_exists(self, slug: str) -> bool:
        """Check if a post exists."""
        ...

    @abstractmethod
    def get_raw_content(self, slug: str) -> str | None:
        """Get raw file content including front matter."""
        ...


class FileStorage(DocumentStorage):
    """File-based storage implementation.

    Posts are Markdown files with optional YAML front matter, named
    ``YYYY-MM-DD-slug.md`` (``.markdown`` is accepted too). Files are never
    written.
    """

    FRONTMATTER_PATTERN = re.compile(
        r"^---\s*\n(.*?)\n---\s*\n",
        re.DOTALL,
    )
    FILENAME_PATTERN = re.compile(r"^(?:(\d{4}-\d{2}-\d{2})-)?(.+)\.(?:md|markdown)$")
    EXTENSIONS = (".md", ".markdown")

    def __init__(self, base_path: Path):
        self.base_path = base_path

    def _iter_files(self) -> list[Path]:
        """All post files under the base path."""
        if not self.base_path.is_dir():
            return []
        return sorted(
            p for p in self.base_path.iterdir() if p.is_file() and p.suffix in self.EXTENSIONS
        )

    def _split_filename(self, filename: str) -> tuple[datetime | None, str]:
        """Split a post filename into (date, slug)."""
        match = self.FILENAME_PATTERN.match(filename)
        if not match:
            return None, Path(filename).stem
        day, slug = match.groups()
        created = datetime.strptime(day, "%Y-%m-%d") if day else None
        return created, slug

    def _find_path(self, slug: str) -> Path | None:
        """Find the file holding a slug."""
        for path in self._iter_files():
            if self._split_filename(path.name)[1] == slug:
                return path
        return None

    def _parse_frontmatter(self, content: str) -> tuple[DocumentMetadata, str]:
        """Parse YAML front matter from content.

        Returns (metadata, content_without_frontmatter).
        """
        match = self.FRONTMATTER_PATTERN.match(content)
        if match:
            try:
                frontmatter = yaml.safe_load(match.group(1)) or {}
                if "date" in frontmatter:
                    created = _coerce_date(frontmatter["date"])
                    if created is None:
                        logger.debug("Ignoring unparseable front matter date: %r", frontmatter["date"])
                        del frontmatter["date"]
                    else:
                        frontmatter["date"] = created
                metadata = DocumentMetadata(**frontmatter)
                content = content[match.end() :]
                return metadata, content
            except (yaml.YAMLError, TypeError, AttributeError, ValidationError):
                pass
        return DocumentMetadata(), content

    def _load(self, path: Path) -> Document:
        """Build a document from a post file."""
        raw = path.read_text(encoding="utf-8")
        metadata, body = self._parse_frontmatter(raw)
        filename_date, slug = self._split_filename(path.name)
        return Document(
            path=str(path.resolve()),
            slug=slug,
            content=body,
            metadata=metadata,
            created_at=metadata.date or filename_date,
        )

    def get_document(self, slug: str) -> Document | None:
        """Get a post by slug."""
        path = self._find_path(slug)
        if path is None:
            return None
        return self._load(path)

    def list_documents(self) -> list[Document]:
        """List all posts, newest first, ties broken by slug."""
        documents = [self._load(path) for path in self._iter_files()]
        documents.sort(key=lambda d: d.slug)
        documents.sort(
            key=lambda d: d.created_at.timestamp() if d.created_at else float("-inf"),
            reverse=True,
        )
        return documents

    def document_exists(self, slug: str) -> bool:
        """Check if a post exists."""
        return self._find_path(slug) is not None

    def get_raw_content(self, slug: str) -> str | None:
        """Get raw file content including front matter."""
        path = self._find_path(slug)
        if path is None:
            return None
        return path.read_text(encoding="utf-8")
