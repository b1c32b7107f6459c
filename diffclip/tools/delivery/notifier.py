"""
Outcome reporting.

The pipeline reports its single outcome (success or failure) through an
`OutcomeReporter`. Variants print a console line, only record an exit code,
or show a modal dialog.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, TextIO

from loguru import logger

from diffclip.errors import EXIT_PIPELINE_ERROR, EXIT_SUCCESS


class Severity(Enum):
    """
    Outcome severity.

    Attributes:
        ERROR: The invocation failed
        INFO: The invocation succeeded
    """

    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Outcome:
    """What happened in one invocation."""

    message: str
    title: str
    severity: Severity
    exit_code: int = EXIT_SUCCESS

    @classmethod
    def success(cls, message: str) -> Outcome:
        return cls(message=message, title="Success", severity=Severity.INFO)

    @classmethod
    def failure(cls, message: str, exit_code: int = EXIT_PIPELINE_ERROR) -> Outcome:
        return cls(
            message=f"An error occurred: {message}",
            title="Error",
            severity=Severity.ERROR,
            exit_code=exit_code,
        )


class OutcomeReporter(Protocol):
    """Presents an outcome to the user."""

    def report(self, outcome: Outcome) -> None: ...


class ConsoleReporter:
    """Writes one line: INFO to stdout, ERROR to stderr."""

    def __init__(self, stdout: TextIO | None = None, stderr: TextIO | None = None) -> None:
        self.stdout = stdout
        self.stderr = stderr

    def report(self, outcome: Outcome) -> None:
        if outcome.severity is Severity.ERROR:
            stream = self.stderr or sys.stderr
        else:
            stream = self.stdout or sys.stdout
        print(outcome.message, file=stream)


class ReturnCodeReporter:
    """Records outcomes without presenting them; used when embedding DiffClip."""

    def __init__(self) -> None:
        self.outcomes: list[Outcome] = []

    def report(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)

    @property
    def exit_code(self) -> int:
        return self.outcomes[-1].exit_code if self.outcomes else EXIT_SUCCESS


class DialogReporter:
    """
    Shows a modal message box with an icon matching the severity.

    Falls back to `fallback` (a console line by default) when Tk is not
    installed or no display is available.
    """

    def __init__(self, fallback: OutcomeReporter | None = None) -> None:
        self.fallback = fallback or ConsoleReporter()

    def report(self, outcome: Outcome) -> None:
        try:
            import tkinter
            from tkinter import messagebox
        except ImportError as e:
            logger.warning(f"Tk is unavailable, reporting on the console: {e}")
            self.fallback.report(outcome)
            return

        try:
            root = tkinter.Tk()
        except tkinter.TclError as e:
            logger.warning(f"Cannot open a dialog, reporting on the console: {e}")
            self.fallback.report(outcome)
            return

        root.withdraw()
        try:
            if outcome.severity is Severity.ERROR:
                messagebox.showerror(outcome.title, outcome.message, parent=root)
            else:
                messagebox.showinfo(outcome.title, outcome.message, parent=root)
        finally:
            root.destroy()


REPORTERS = {
    "console": ConsoleReporter,
    "dialog": DialogReporter,
    "none": ReturnCodeReporter,
}


def create_reporter(kind: str) -> OutcomeReporter:
    """Build the reporter registered under `kind`."""
    try:
        return REPORTERS[kind]()
    except KeyError as e:
        raise ValueError(f"Unsupported output type: {kind}") from e
