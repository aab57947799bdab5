"""Read-only preview of posts with their git-derived dates."""

from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from lastmod.config import settings
from lastmod.core.history import GitHistory
from lastmod.core.models import Document
from lastmod.core.pipeline import RenderPass, modified_label
from lastmod.core.storage import FileStorage

app = FastAPI(
    title=settings.site_title,
    debug=settings.debug,
)

templates_path = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(templates_path))
templates.env.filters["timeago"] = modified_label

storage = FileStorage(settings.posts_path)
history = GitHistory(settings.source_dir, git_executable=settings.git_executable)
render_pass = RenderPass(storage, history)


def get_context(**kwargs) -> dict:
    """Create base context for templates."""
    return {
        "site_title": settings.site_title,
        **kwargs,
    }


def _sort_key(document: Document) -> float:
    modified = document.modified
    return modified.timestamp() if modified else float("-inf")


def _isoformat(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt else None


def document_summary(document: Document) -> dict:
    """JSON-friendly view of an enriched post."""
    return {
        "slug": document.slug,
        "title": document.title,
        "path": document.path,
        "date": _isoformat(document.created_at),
        "last_modified_at": _isoformat(document.last_modified_at),
        "revision_count": document.revision_count,
    }


def _rendered_or_404(slug: str):
    document = storage.get_document(slug)
    if document is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return render_pass.render(document)


@app.get("/", response_class=HTMLResponse)
def index(request: Request):
    """Home page - posts ordered by last modification."""
    posts = render_pass.run()
    posts.sort(key=lambda p: _sort_key(p.document), reverse=True)
    return templates.TemplateResponse(
        request,
        "post/list.html",
        get_context(posts=posts),
    )


@app.get("/posts/{slug}", response_class=HTMLResponse)
def view_post(request: Request, slug: str):
    """View a rendered post."""
    post = _rendered_or_404(slug)
    return templates.TemplateResponse(
        request,
        "post/view.html",
        get_context(post=post),
    )


@app.get("/api/posts")
def api_posts():
    """List every post with its computed dates."""
    return [document_summary(p.document) for p in render_pass.run()]


@app.get("/api/posts/{slug}")
def api_post(slug: str):
    """Computed dates for one post."""
    post = _rendered_or_404(slug)
    return document_summary(post.document)
