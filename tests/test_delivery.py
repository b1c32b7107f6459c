"""Tests for the clipboard sink and outcome reporters."""

from __future__ import annotations

import io
import sys

import pyperclip
import pytest

from diffclip.errors import EXIT_PIPELINE_ERROR, EXIT_VALIDATION_ERROR, ClipboardUnavailable
from diffclip.tools.base import ToolErrorCode, ToolStatus
from diffclip.tools.delivery import (
    ClipboardSink,
    ConsoleReporter,
    DialogReporter,
    Outcome,
    ReturnCodeReporter,
    Severity,
    create_reporter,
)


def test_deliver_copies_text_verbatim(monkeypatch: pytest.MonkeyPatch) -> None:
    copied = []
    monkeypatch.setattr("pyperclip.copy", copied.append)

    text = "Line 1: + tab\there\r\n\x00end"
    result = ClipboardSink().run(text)

    assert result.status == ToolStatus.SUCCESS
    assert copied == [text]


def test_clipboard_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_copy(text: str) -> None:
        raise pyperclip.PyperclipException("no copy/paste mechanism")

    monkeypatch.setattr("pyperclip.copy", fake_copy)

    with pytest.raises(ClipboardUnavailable):
        ClipboardSink().deliver("hello")

    result = ClipboardSink().run("hello")
    assert result.error_code == ToolErrorCode.CLIPBOARD_UNAVAILABLE


def test_outcome_constructors() -> None:
    ok = Outcome.success("Git diff has been copied to the clipboard.")
    failed = Outcome.failure("Ref not found: feature", EXIT_VALIDATION_ERROR)

    assert (ok.title, ok.severity, ok.exit_code) == ("Success", Severity.INFO, 0)
    assert failed.message == "An error occurred: Ref not found: feature"
    assert (failed.title, failed.severity, failed.exit_code) == (
        "Error",
        Severity.ERROR,
        EXIT_VALIDATION_ERROR,
    )


def test_console_reporter_routes_by_severity() -> None:
    out, err = io.StringIO(), io.StringIO()
    reporter = ConsoleReporter(stdout=out, stderr=err)

    reporter.report(Outcome.success("copied"))
    reporter.report(Outcome.failure("boom"))

    assert out.getvalue() == "copied\n"
    assert err.getvalue() == "An error occurred: boom\n"


def test_return_code_reporter() -> None:
    reporter = ReturnCodeReporter()
    assert reporter.exit_code == 0

    reporter.report(Outcome.failure("network down", EXIT_PIPELINE_ERROR))

    assert reporter.exit_code == EXIT_PIPELINE_ERROR
    assert len(reporter.outcomes) == 1


def test_create_reporter() -> None:
    assert isinstance(create_reporter("console"), ConsoleReporter)
    assert isinstance(create_reporter("dialog"), DialogReporter)
    assert isinstance(create_reporter("none"), ReturnCodeReporter)
    with pytest.raises(ValueError):
        create_reporter("toast")


def test_dialog_without_tk_reports_on_console(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "tkinter", None)
    err = io.StringIO()
    reporter = DialogReporter(fallback=ConsoleReporter(stderr=err))

    reporter.report(Outcome.failure("boom"))

    assert err.getvalue() == "An error occurred: boom\n"


def test_dialog_without_display_reports_on_console(monkeypatch: pytest.MonkeyPatch) -> None:
    tkinter = pytest.importorskip("tkinter")

    def no_display() -> None:
        raise tkinter.TclError("no display name and no $DISPLAY environment variable")

    monkeypatch.delenv("DISPLAY", raising=False)
    monkeypatch.setattr(tkinter, "Tk", no_display)
    out = io.StringIO()
    reporter = DialogReporter(fallback=ConsoleReporter(stdout=out))

    reporter.report(Outcome.success("copied"))

    assert out.getvalue() == "copied\n"
