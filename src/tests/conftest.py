"""Shared fixtures: throwaway git repositories with fixed commit dates."""

import os
import subprocess
from pathlib import Path

import pytest


class GitRepo:
    """Small helper around a temporary git work tree."""

    def __init__(self, root: Path):
        self.root = root

    def git(self, *args: str, date: str | None = None, author_date: str | None = None) -> str:
        env = {
            **os.environ,
            "GIT_AUTHOR_NAME": "Test Author",
            "GIT_AUTHOR_EMAIL": "author@example.com",
            "GIT_COMMITTER_NAME": "Test Author",
            "GIT_COMMITTER_EMAIL": "author@example.com",
        }
        if date is not None:
            env["GIT_AUTHOR_DATE"] = date
            env["GIT_COMMITTER_DATE"] = date
        if author_date is not None:
            env["GIT_AUTHOR_DATE"] = author_date
        result = subprocess.run(
            ["git", *args],
            cwd=self.root,
            env=env,
            check=True,
            capture_output=True,
            text=True,
        )
        return result.stdout

    def commit_file(self, relpath: str, content: str, date: str, author_date: str | None = None) -> None:
        """Write a file and commit it with the given committer date.

        The author date matches unless ``author_date`` is given.
        """
        path = self.root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        self.git("add", relpath)
        self.git("commit", "-q", "-m", f"update {relpath}", date=date, author_date=author_date)


@pytest.fixture
def git_repo(tmp_path):
    """An empty git repository in a temp directory."""
    repo = GitRepo(tmp_path)
    repo.git("init", "-q")
    repo.git("config", "commit.gpgsign", "false")
    return repo
