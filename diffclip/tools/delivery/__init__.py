"""
Delivery tools for DiffClip.

This package provides:
- The clipboard sink for the final text
- Outcome reporters (console line, exit code only, modal dialog)
"""

from .clipboard import ClipboardSink
from .notifier import (
    ConsoleReporter,
    DialogReporter,
    Outcome,
    OutcomeReporter,
    ReturnCodeReporter,
    Severity,
    create_reporter,
)

__all__ = [
    "ClipboardSink",
    "ConsoleReporter",
    "DialogReporter",
    "Outcome",
    "OutcomeReporter",
    "ReturnCodeReporter",
    "Severity",
    "create_reporter",
]
