"""Report rendering for DiffClip."""

from .formatter import (
    END_MARKER,
    NO_CHANGES_NOTICE,
    START_MARKER,
    ReportFormatter,
    format_report,
    merge_line_edits,
)

__all__ = [
    "END_MARKER",
    "NO_CHANGES_NOTICE",
    "START_MARKER",
    "ReportFormatter",
    "format_report",
    "merge_line_edits",
]
