"""Render pass: run pre-render hooks on each post, then convert it to HTML."""

import logging
from dataclasses import dataclass
from datetime import datetime
from functools import partial
from typing import Callable

from markdown.util import Registry

from lastmod.core.enricher import enrich_document
from lastmod.core.history import RevisionHistory
from lastmod.core.models import Document
from lastmod.core.parser import render_markdown
from lastmod.core.storage import DocumentStorage

logger = logging.getLogger(__name__)

PreRenderHook = Callable[[Document], object]

LAST_MODIFIED_HOOK = "last_modified"


@dataclass(frozen=True)
class NamedHook:
    """Registry entry pairing a hook with its name."""

    name: str
    func: PreRenderHook


@dataclass
class RenderedPost:
    """A post after hooks ran and its body was converted."""

    document: Document
    html: str
    toc_html: str = ""

    @property
    def modified(self) -> datetime | None:
        return self.document.modified


def modified_label(dt: datetime | None, now: datetime | None = None) -> str:
    """Convert datetime to relative time string."""
    if dt is None:
        return ""
    if now is None:
        now = datetime.now(tz=dt.tzinfo)
    seconds = (now - dt).total_seconds()
    if seconds < 60:
        return "just now"
    elif seconds < 3600:
        m = int(seconds // 60)
        return f"{m}m ago"
    elif seconds < 86400:
        h = int(seconds // 3600)
        return f"{h}h ago"
    elif seconds < 604800:
        d = int(seconds // 86400)
        return f"{d}d ago"
    else:
        return dt.strftime("%Y-%m-%d")


class RenderPass:
    """Batch render of every post in a storage.

    Hooks are kept in a priority registry and called with the document
    before its body is converted. The last-modified enricher is registered
    by default.
    """

    def __init__(self, storage: DocumentStorage, history: RevisionHistory):
        self.storage = storage
        self.history = history
        self.hooks: Registry = Registry()
        self.register_hook(partial(enrich_document, history=history), LAST_MODIFIED_HOOK, 100)

    def register_hook(self, hook: PreRenderHook, name: str, priority: float) -> None:
        """Register a pre-render hook. Higher priority runs first."""
        self.hooks.register(NamedHook(name, hook), name, priority)

    def deregister_hook(self, name: str) -> None:
        """Remove a hook by name. Unknown names are ignored."""
        self.hooks.deregister(name, strict=False)

    def _run_hooks(self, document: Document) -> None:
        for hook in self.hooks:
            try:
                hook.func(document)
            except Exception:
                logger.exception("Pre-render hook %r failed for %s", hook.name, document.path)

    def render(self, document: Document) -> RenderedPost:
        """Run hooks on a document and render its body."""
        self._run_hooks(document)
        html, toc_html = render_markdown(document.content)
        return RenderedPost(document=document, html=html, toc_html=toc_html)

    def run(self) -> list[RenderedPost]:
        """Render every stored post."""
        posts = [self.render(document) for document in self.storage.list_documents()]
        logger.info(
            "Rendered %d posts, %d with a last-modified date",
            len(posts),
            sum(1 for p in posts if p.document.last_modified_at is not None),
        )
        return posts
