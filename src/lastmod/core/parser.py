"""Markdown rendering for post bodies."""

from markdown import Markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import SimpleTagInlineProcessor


# Pattern for strikethrough: ~~text~~
# Group 2 must contain the text (SimpleTagInlineProcessor expectation)
STRIKETHROUGH_PATTERN = r"(~~)(.*?)~~"


class StrikethroughExtension(Extension):
    """Markdown extension for ~~strikethrough~~ text."""

    def extendMarkdown(self, md: Markdown) -> None:
        """Add strikethrough pattern to markdown parser."""
        md.inlinePatterns.register(
            SimpleTagInlineProcessor(STRIKETHROUGH_PATTERN, "del"),
            "strikethrough",
            50,
        )


def create_parser() -> Markdown:
    """Create a Markdown parser configured for blog posts.

    Returns:
        Configured Markdown parser instance.
    """
    return Markdown(
        extensions=[
            # Core formatting
            "extra",  # Includes: abbreviations, attr_list, def_list, fenced_code, footnotes, md_in_html, tables
            "sane_lists",
            "smarty",
            "toc",
            # PyMdown extensions
            "pymdownx.tasklist",
            StrikethroughExtension(),
        ]
    )


def render_markdown(content: str) -> tuple[str, str]:
    """Render a post body to HTML.

    Args:
        content: Markdown body without front matter.

    Returns:
        Tuple of (html_content, toc_html).
    """
    parser = create_parser()
    html = parser.convert(content)
    toc_html = getattr(parser, "toc", "")
    return html, toc_html
