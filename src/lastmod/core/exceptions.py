"""Exceptions raised by lastmod."""


class LastmodError(Exception):
    """Base class for lastmod errors."""


class HistoryUnavailableError(LastmodError):
    """Revision history could not be read for a path."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"history unavailable for {path}: {reason}")
