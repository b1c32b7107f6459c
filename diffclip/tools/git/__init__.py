"""
Git tools package for DiffClip.

This package provides tools for:
- Opening a Git working copy read-only
- Resolving `source..target` ref-specs
- Extracting numbered added/deleted lines per file
"""

from .git_changes import (
    WORKING_DIRECTORY,
    ChangeSet,
    FileChange,
    GitAnalysisInput,
    GitChangeDetector,
    LineEdit,
    LineKind,
    parse_hunks,
    parse_ref_spec,
)

__all__ = [
    "WORKING_DIRECTORY",
    "ChangeSet",
    "FileChange",
    "GitAnalysisInput",
    "GitChangeDetector",
    "LineEdit",
    "LineKind",
    "parse_hunks",
    "parse_ref_spec",
]
