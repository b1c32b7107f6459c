"""
Report formatter.

Renders a ChangeSet into the plain-text report that is copied to the
clipboard or handed to the summarizer. Rendering is pure: the same ChangeSet
always produces byte-identical text.
"""

from __future__ import annotations

from loguru import logger

from diffclip.tools.base import BaseTool, ToolResult
from diffclip.tools.git.git_changes import ChangeSet, FileChange, LineEdit, LineKind

START_MARKER = "===== START OF GIT DIFF ====="
END_MARKER = "===== END OF GIT DIFF ====="
NO_CHANGES_NOTICE = (
    "Note: No changes detected between the specified commits or branches."
)


def merge_line_edits(file_change: FileChange) -> list[LineEdit]:
    """Interleave added and deleted lines by line number.

    Added lines go first and `sorted` is stable, so an added line and a
    deleted line with the same number always come out added-first.
    """
    combined = [*file_change.added_lines, *file_change.deleted_lines]
    return sorted(combined, key=lambda edit: edit.line_number)


def _format_edit(edit: LineEdit) -> str:
    sign = "+" if edit.kind is LineKind.ADDED else "-"
    return f"Line {edit.line_number}: {sign} {edit.content}"


def _format_file(file_change: FileChange) -> list[str]:
    parts = [
        f"File: {file_change.path}\n",
        f"Summary of changes: +{file_change.lines_added} lines, "
        f"-{file_change.lines_deleted} lines\n",
        f"--- Begin file changes for: {file_change.path} ---\n",
    ]
    # Entries carry their own terminator, nothing is appended between them
    parts.extend(_format_edit(edit) for edit in merge_line_edits(file_change))
    parts.append("\n")
    parts.append(f"--- End of changes for {file_change.path} ---\n")
    return parts


def format_report(change_set: ChangeSet) -> str:
    """Render `change_set` as a report.

    Args:
        change_set: Changes to render; files are emitted in their given order.

    Returns:
        Report text, starting with START_MARKER and ending with END_MARKER.
    """
    total_added = change_set.total_lines_added
    total_deleted = change_set.total_lines_deleted

    parts = [
        f"{START_MARKER}\n",
        f"Diff from: {change_set.source_ref}\n",
        f"Diff to: {change_set.target_ref}\n",
        f"Added lines: {total_added}\n",
        f"Deleted lines: {total_deleted}\n",
    ]

    if total_added == 0 and total_deleted == 0:
        parts.append(f"{NO_CHANGES_NOTICE}\n")
    else:
        for file_change in change_set.files:
            parts.extend(_format_file(file_change))

    parts.append(f"{END_MARKER}\n")
    return "".join(parts)


class ReportFormatter(BaseTool[ChangeSet, str]):
    """Tool wrapper around `format_report`."""

    def __init__(self) -> None:
        super().__init__("ReportFormatter")

    def execute(self, input_data: ChangeSet) -> ToolResult[str]:
        report = format_report(input_data)
        logger.info(
            f"Report rendered: {len(input_data.files)} files, {len(report)} characters"
        )
        return ToolResult.success(
            output=report,
            metrics=self._create_metrics(files_processed=len(input_data.files)),
        )
