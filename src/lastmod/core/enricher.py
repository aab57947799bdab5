"""Last-modified enrichment for documents about to be rendered."""

import logging
from datetime import datetime

from lastmod.core.exceptions import HistoryUnavailableError
from lastmod.core.history import RevisionHistory
from lastmod.core.models import Document, Revision

logger = logging.getLogger(__name__)


def _lookup(path: str, history: RevisionHistory) -> list[Revision]:
    """Read revisions for a path, treating any failure as no history."""
    try:
        return history.revisions(path)
    except (HistoryUnavailableError, OSError, ValueError) as e:
        logger.debug("No revision history for %s: %s", path, e)
        return []


def _newest(revisions: list[Revision]) -> datetime | None:
    """Timestamp of the most recent revision, or None if there are fewer than two."""
    distinct = {r.commit: r for r in revisions}
    if len(distinct) <= 1:
        return None
    try:
        return max(r.timestamp for r in distinct.values())
    except TypeError:
        # naive and timezone-aware timestamps cannot be ordered
        logger.debug("Incomparable revision timestamps for %s", revisions[0].path)
        return None


def last_modified_for(path: str, history: RevisionHistory) -> datetime | None:
    """Return the last-modified timestamp for ``path``.

    Args:
        path: File path of the document, as known to the history source.
        history: Revision history to query.

    Returns:
        The newest commit timestamp when the path has two or more distinct
        revisions, otherwise None.
    """
    return _newest(_lookup(path, history))


def enrich_document(document: Document, history: RevisionHistory) -> Document:
    """Attach revision count and last-modified date to a document.

    The document is changed in memory only. When the path has one revision
    or fewer, ``last_modified_at`` is left unset so callers fall back to the
    creation date.
    """
    revisions = _lookup(document.path, history)
    document.revision_count = len({r.commit for r in revisions})
    document.last_modified_at = _newest(revisions)
    if document.last_modified_at is not None:
        logger.debug(
            "%s: %d revisions, last modified %s",
            document.path,
            document.revision_count,
            document.last_modified_at.isoformat(),
        )
    return document
