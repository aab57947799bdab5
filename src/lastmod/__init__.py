"""Git-history based last-modified dates for static blog posts."""

__version__ = "0.1.0"
