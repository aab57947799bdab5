"""Revision history lookups for document paths."""

import logging
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from lastmod.core.exceptions import HistoryUnavailableError
from lastmod.core.models import Revision

logger = logging.getLogger(__name__)

# Commit hash and strict ISO-8601 committer date, tab separated
LOG_FORMAT = "%H%x09%cI"


class RevisionHistory(ABC):
    """Abstract base class for revision history sources."""

    @abstractmethod
    def revisions(self, path: str) -> list[Revision]:
        """Return the revisions touching exactly ``path``.

        Order is not guaranteed. Raises HistoryUnavailableError when the
        history cannot be read at all.
        """
        ...


class GitHistory(RevisionHistory):
    """Revision history read from ``git log`` in a work tree.

    Timestamps are committer dates (``%cI``), not author dates, so a
    rebased or cherry-picked commit counts from when it landed on the
    branch. Renames are not followed, so a moved file only reports the
    commits made under its current path.
    """

    def __init__(self, repo_root: Path, git_executable: str = "git"):
        self.repo_root = repo_root
        self.git_executable = git_executable

    def _run_log(self, path: str) -> str:
        """Run git log for a path and return its stdout."""
        cmd = [self.git_executable, "log", f"--format={LOG_FORMAT}", "--", path]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                cwd=str(self.repo_root),
            )
        except (OSError, ValueError) as e:
            # ValueError: embedded NUL byte in the path
            raise HistoryUnavailableError(path, str(e)) from e

        if result.returncode != 0:
            raise HistoryUnavailableError(path, result.stderr.strip() or "git log failed")
        return result.stdout

    def _parse_line(self, path: str, line: str) -> Revision | None:
        """Parse one ``<hash>\\t<iso date>`` line."""
        commit, sep, stamp = line.partition("\t")
        if not sep:
            return None
        try:
            timestamp = datetime.fromisoformat(stamp.strip())
        except ValueError:
            return None
        return Revision(path=path, commit=commit.strip(), timestamp=timestamp)

    def revisions(self, path: str) -> list[Revision]:
        """Return the revisions git records for ``path``."""
        output = self._run_log(path)
        revisions = []
        for line in output.splitlines():
            if not line.strip():
                continue
            revision = self._parse_line(path, line)
            if revision is None:
                logger.debug("Skipping unparseable git log line for %s: %r", path, line)
                continue
            revisions.append(revision)
        return revisions


class StaticHistory(RevisionHistory):
    """In-memory revision history, keyed by path."""

    def __init__(self, revisions: Iterable[Revision] = ()):
        self._by_path: dict[str, list[Revision]] = {}
        for revision in revisions:
            self._by_path.setdefault(revision.path, []).append(revision)

    def revisions(self, path: str) -> list[Revision]:
        return list(self._by_path.get(path, []))
