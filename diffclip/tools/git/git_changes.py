"""
Git Change Detector Tool

This tool extracts line-level changes from a Git repository. It can:
- Compare the HEAD commit of the current branch against the working tree
- Compare two refs given as `source..target`
- Parse unified hunks into numbered added/deleted lines per file

The repository is only ever read; the handle is closed when extraction ends.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from git import Diff, Repo
from git.exc import BadName, BadObject, InvalidGitRepositoryError, NoSuchPathError
from git.objects import Commit
from loguru import logger

from diffclip.errors import DiffClipError, InvalidRefSpec, InvalidRepository, RefNotFound
from diffclip.tools.base import BaseTool, ToolResult

WORKING_DIRECTORY = "Working Directory"
REF_SPEC_SEPARATOR = ".."

_HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,\d+)? \+(\d+)(?:,\d+)? @@")


class LineKind(Enum):
    """Side of the diff a line belongs to."""

    ADDED = "+"
    DELETED = "-"


@dataclass(frozen=True)
class LineEdit:
    """A single added or deleted source line."""

    line_number: int  # 1-based, on the new side for ADDED, old side for DELETED
    content: str  # verbatim, including the line terminator git reported
    kind: LineKind


@dataclass(frozen=True)
class FileChange:
    """Represents the line changes in a single file."""

    path: str
    added_lines: list[LineEdit] = field(default_factory=list)
    deleted_lines: list[LineEdit] = field(default_factory=list)
    change_type: str = "M"  # 'A' (added), 'D' (deleted), 'M' (modified), 'R' (renamed)
    old_path: str | None = None  # For renamed files

    @property
    def lines_added(self) -> int:
        return len(self.added_lines)

    @property
    def lines_deleted(self) -> int:
        return len(self.deleted_lines)


@dataclass(frozen=True)
class ChangeSet:
    """All modifications between a source ref and a target ref."""

    source_ref: str
    target_ref: str
    files: list[FileChange] = field(default_factory=list)

    @property
    def total_lines_added(self) -> int:
        return sum(change.lines_added for change in self.files)

    @property
    def total_lines_deleted(self) -> int:
        return sum(change.lines_deleted for change in self.files)


@dataclass
class GitAnalysisInput:
    """Input data for change extraction."""

    repo_path: str
    ref_spec: str | None = None  # None or "" means HEAD vs working tree


def parse_ref_spec(ref_spec: str | None) -> tuple[str, str] | None:
    """
    Split a `source..target` ref-spec.

    Args:
        ref_spec: Ref-spec string, or None/empty for the working tree comparison

    Returns:
        (source, target) names, or None when no ref-spec was given

    Raises:
        InvalidRefSpec: The ref-spec does not hold exactly two non-empty names
    """
    if not ref_spec:
        return None

    names = [name.strip() for name in ref_spec.split(REF_SPEC_SEPARATOR)]
    if len(names) != 2 or not all(names):
        raise InvalidRefSpec(
            f"Invalid branch format '{ref_spec}'. Use: sourceBranch..targetBranch"
        )
    return names[0], names[1]


def parse_hunks(patch: str) -> tuple[list[LineEdit], list[LineEdit]]:
    """
    Parse the hunks of a single-file unified diff into numbered line edits.

    Anything before the first `@@` header (file headers, "Binary files ...
    differ") is ignored. A `\\ No newline at end of file` marker strips the
    terminator from the edit just before it.

    Args:
        patch: Unified diff text for one file

    Returns:
        Tuple of (added_lines, deleted_lines), each in patch order
    """
    added: list[LineEdit] = []
    deleted: list[LineEdit] = []

    old_line = new_line = 0
    in_hunk = False
    last: tuple[list[LineEdit], int] | None = None

    pieces = patch.split("\n")
    if pieces and pieces[-1] == "":
        pieces.pop()

    for raw in pieces:
        header = _HUNK_HEADER.match(raw)
        if header:
            old_line = int(header.group(1))
            new_line = int(header.group(2))
            in_hunk = True
            last = None
            continue

        if not in_hunk or not raw:
            continue

        marker, content = raw[0], raw[1:] + "\n"
        if marker == "+":
            added.append(LineEdit(new_line, content, LineKind.ADDED))
            last = (added, len(added) - 1)
            new_line += 1
        elif marker == "-":
            deleted.append(LineEdit(old_line, content, LineKind.DELETED))
            last = (deleted, len(deleted) - 1)
            old_line += 1
        elif marker == " ":
            old_line += 1
            new_line += 1
            last = None
        elif marker == "\\":
            if last is not None:
                edits, index = last
                edit = edits[index]
                edits[index] = LineEdit(edit.line_number, edit.content[:-1], edit.kind)
            last = None

    return added, deleted


class GitChangeDetector(BaseTool[GitAnalysisInput, ChangeSet]):
    """
    Extracts a ChangeSet from a Git repository.

    Two comparisons are supported:
    1. HEAD of the current branch against the working tree (no ref-spec)
    2. Two resolvable refs given as `source..target`
    """

    def __init__(self) -> None:
        super().__init__("GitChangeDetector")

    def execute(self, input_data: GitAnalysisInput) -> ToolResult[ChangeSet]:
        """
        Run change extraction.

        Args:
            input_data: Repository path and optional ref-spec

        Returns:
            Tool result holding the ChangeSet
        """
        try:
            change_set = self.extract(input_data.repo_path, input_data.ref_spec)
        except DiffClipError as e:
            return self._error_result(e)

        return ToolResult.success(
            output=change_set,
            metrics=self._create_metrics(
                files_processed=len(change_set.files),
                lines_processed=change_set.total_lines_added
                + change_set.total_lines_deleted,
            ),
        )

    def extract(self, repo_path: str, ref_spec: str | None = None) -> ChangeSet:
        """
        Extract the line-level changes selected by `ref_spec`.

        Args:
            repo_path: Path to a directory inside the repository
            ref_spec: None/empty for HEAD vs working tree, or `source..target`

        Returns:
            ChangeSet with files in the order git reports them

        Raises:
            InvalidRefSpec: Malformed ref-spec (checked before opening the repository)
            InvalidRepository: Path is not a usable git working copy
            RefNotFound: A named ref (or HEAD) does not resolve
        """
        ref_names = parse_ref_spec(ref_spec)

        with self._open_repository(repo_path) as repo:
            if ref_names is None:
                if repo.bare:
                    raise InvalidRepository(
                        f"Repository has no working tree: {repo_path}"
                    )
                head_commit = self._resolve(repo, "HEAD")
                diffs = head_commit.diff(None, create_patch=True)
                source_ref, target_ref = head_commit.hexsha, WORKING_DIRECTORY
            else:
                source_commit = self._resolve(repo, ref_names[0])
                target_commit = self._resolve(repo, ref_names[1])
                diffs = source_commit.diff(target_commit, create_patch=True)
                source_ref, target_ref = source_commit.hexsha, target_commit.hexsha

            files = [self._process_diff_change(diff) for diff in diffs]

        change_set = ChangeSet(
            source_ref=source_ref,
            target_ref=target_ref,
            files=[change for change in files if change is not None],
        )
        logger.info(
            f"{source_ref} and {target_ref} have {len(change_set.files)} file changes detected"
        )
        return change_set

    def _open_repository(self, repo_path: str) -> Repo:
        """
        Open the Git repository containing `repo_path`.

        Raises:
            InvalidRepository: Path does not exist, is not a directory, or is
                not inside a Git repository
        """
        path = Path(repo_path).expanduser().resolve()

        if not path.exists():
            raise InvalidRepository(f"The directory '{repo_path}' does not exist.")

        if not path.is_dir():
            raise InvalidRepository(f"Repository path is not a directory: {path}")

        try:
            repo = Repo(path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as err:
            raise InvalidRepository("DiffClip only works on git repositories.") from err

        logger.info(f"Git repository opened: {repo.working_tree_dir or repo.git_dir}")
        return repo

    def _resolve(self, repo: Repo, ref: str) -> Commit:
        """Resolve a branch, tag or commit id to its commit."""
        try:
            return repo.commit(ref)
        except (BadName, BadObject, ValueError, IndexError) as err:
            raise RefNotFound(ref) from err

    def _process_diff_change(self, diff: Diff) -> FileChange | None:
        """
        Convert a single GitPython diff into a FileChange.

        Args:
            diff: Git diff object created with `create_patch=True`

        Returns:
            FileChange object or None if the diff carries no path
        """
        if diff.new_file:
            change_type = "A"
        elif diff.deleted_file:
            change_type = "D"
        elif diff.renamed_file:
            change_type = "R"
        else:
            change_type = "M"

        file_path = diff.b_path or diff.a_path or ""
        if not file_path:
            logger.warning("No valid file path in diff change, skipping")
            return None

        patch = diff.diff or b""
        if isinstance(patch, bytes):
            patch = patch.decode("utf-8", errors="replace")

        added, deleted = parse_hunks(patch)

        return FileChange(
            path=file_path,
            added_lines=added,
            deleted_lines=deleted,
            change_type=change_type,
            old_path=diff.a_path if change_type == "R" else None,
        )
