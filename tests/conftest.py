"""Shared fixtures: throwaway git repositories built with GitPython."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from git import Actor, Repo

AUTHOR = Actor("DiffClip Tests", "tests@example.com")


def commit_files(repo: Repo, files: dict[str, str], message: str) -> str:
    """Write `files` into the working tree, stage and commit them."""
    root = Path(repo.working_tree_dir)
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8", newline="")
    repo.index.add([str(root / name) for name in files])
    commit = repo.index.commit(message, author=AUTHOR, committer=AUTHOR)
    return commit.hexsha


@pytest.fixture
def git_repo(tmp_path: Path) -> Iterator[Repo]:
    """A repository with one commit containing a.txt and b.txt."""
    repo = Repo.init(tmp_path / "repo")
    commit_files(
        repo,
        {"a.txt": "one\ntwo\nthree\n", "b.txt": "alpha\nbeta\n"},
        "initial",
    )
    yield repo
    repo.close()


@pytest.fixture
def make_commit():
    """Helper fixture exposing `commit_files`."""
    return commit_files
