"""
Tools package for DiffClip.

This package contains the pipeline stages:
- Git change extraction
- Report rendering
- LLM commit-message summarization
- Clipboard delivery and outcome reporting
"""

from .base import (
    BaseTool,
    ToolErrorCode,
    ToolMetrics,
    ToolResult,
    ToolStatus,
)
from .delivery.clipboard import ClipboardSink
from .delivery.notifier import Severity
from .git.git_changes import GitChangeDetector
from .llm.tool import CommitMessageSummarizer
from .report.formatter import ReportFormatter

__all__ = [
    # Base classes and types
    "BaseTool",
    "ToolResult",
    "ToolMetrics",
    "ToolStatus",
    "ToolErrorCode",
    "Severity",
    # Concrete tools
    "GitChangeDetector",
    "ReportFormatter",
    "CommitMessageSummarizer",
    "ClipboardSink",
]
