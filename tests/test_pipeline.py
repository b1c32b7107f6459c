"""End-to-end tests for the pipeline and the command line.

The clipboard is replaced by a list via monkeypatch and summaries come from
the mock provider, so no network or display is needed.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from git import Repo

from diffclip.config import Settings
from diffclip.errors import EXIT_PIPELINE_ERROR, EXIT_SUCCESS, EXIT_VALIDATION_ERROR
from diffclip.main import main
from diffclip.pipeline import REPORT_COPIED, SUMMARY_COPIED, DiffClipPipeline, PipelineRequest
from diffclip.tools.delivery.notifier import ReturnCodeReporter, Severity
from diffclip.tools.llm.base import LLMConfig
from diffclip.tools.llm.providers import MockProvider
from diffclip.tools.llm.tool import CommitMessageSummarizer
from diffclip.tools.report.formatter import START_MARKER


@pytest.fixture
def clipboard(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    copied: list[str] = []
    monkeypatch.setattr("pyperclip.copy", copied.append)
    return copied


@pytest.fixture
def dirty_repo(git_repo: Repo) -> Repo:
    (Path(git_repo.working_tree_dir) / "a.txt").write_text(
        "one\nfoo\nthree\n", encoding="utf-8"
    )
    return git_repo


class SummarizerSpy:
    """Summarizer factory that records whether it was used."""

    def __init__(self, responses: list[str]) -> None:
        self.provider = MockProvider(LLMConfig(api_key="k", model="m"), responses)
        self.calls = 0

    def __call__(self, settings: Settings) -> CommitMessageSummarizer:
        self.calls += 1
        return CommitMessageSummarizer(provider=self.provider, refine=settings.refine)


def test_raw_report_is_copied(dirty_repo: Repo, clipboard: list[str]) -> None:
    reporter = ReturnCodeReporter()
    pipeline = DiffClipPipeline(reporter=reporter)

    outcome = pipeline.run(PipelineRequest(directory_path=dirty_repo.working_tree_dir))

    assert outcome.message == REPORT_COPIED
    assert outcome.severity is Severity.INFO
    assert reporter.exit_code == EXIT_SUCCESS
    assert len(clipboard) == 1
    assert clipboard[0].startswith(START_MARKER)
    assert "Line 2: + foo\nLine 2: - two\n" in clipboard[0]


def test_summary_is_copied(dirty_repo: Repo, clipboard: list[str]) -> None:
    spy = SummarizerSpy(["draft text", "final text"])
    pipeline = DiffClipPipeline(summarizer_factory=spy)

    outcome = pipeline.run(
        PipelineRequest(directory_path=dirty_repo.working_tree_dir, summarise=True)
    )

    assert outcome.message == SUMMARY_COPIED
    assert clipboard == ["final text"]
    assert spy.provider.response_index == 2
    assert START_MARKER in spy.provider.requests[0][1].content


def test_single_turn_when_refine_disabled(dirty_repo: Repo, clipboard: list[str]) -> None:
    spy = SummarizerSpy(["draft text", "final text"])
    pipeline = DiffClipPipeline(settings=Settings(refine=False), summarizer_factory=spy)

    pipeline.run(PipelineRequest(directory_path=dirty_repo.working_tree_dir, summarise=True))

    assert clipboard == ["draft text"]
    assert spy.provider.response_index == 1


def test_missing_branch_makes_no_network_call(git_repo: Repo, clipboard: list[str]) -> None:
    spy = SummarizerSpy(["unused"])
    pipeline = DiffClipPipeline(summarizer_factory=spy)
    base = git_repo.active_branch.name

    outcome = pipeline.run(
        PipelineRequest(
            directory_path=git_repo.working_tree_dir,
            ref_spec=f"{base}..feature",
            summarise=True,
        )
    )

    assert outcome.exit_code == EXIT_VALIDATION_ERROR
    assert outcome.severity is Severity.ERROR
    assert "feature" in outcome.message
    assert spy.calls == 0
    assert spy.provider.requests == []
    assert clipboard == []


def test_failed_summary_does_not_deliver_report(dirty_repo: Repo, clipboard: list[str]) -> None:
    spy = SummarizerSpy([""])
    pipeline = DiffClipPipeline(settings=Settings(refine=False), summarizer_factory=spy)

    outcome = pipeline.run(
        PipelineRequest(directory_path=dirty_repo.working_tree_dir, summarise=True)
    )

    assert outcome.exit_code == EXIT_PIPELINE_ERROR
    assert clipboard == []


def test_missing_credential_is_an_authentication_failure(
    dirty_repo: Repo, clipboard: list[str]
) -> None:
    pipeline = DiffClipPipeline(settings=Settings(provider="openai", openai_key=""))

    outcome = pipeline.run(
        PipelineRequest(directory_path=dirty_repo.working_tree_dir, summarise=True)
    )

    assert outcome.exit_code == EXIT_PIPELINE_ERROR
    assert outcome.message == "An error occurred: No API key configured for OpenAI"
    assert clipboard == []


def test_not_a_repository(tmp_path: Path, clipboard: list[str]) -> None:
    outcome = DiffClipPipeline().run(PipelineRequest(directory_path=str(tmp_path)))

    assert outcome.exit_code == EXIT_VALIDATION_ERROR
    assert outcome.message == "An error occurred: DiffClip only works on git repositories."


class TestCommandLine:
    """`diffclip` CLI behaviour."""

    def test_copies_report(
        self,
        dirty_repo: Repo,
        clipboard: list[str],
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main([dirty_repo.working_tree_dir, "--config", str(tmp_path / "none.json")])

        assert code == EXIT_SUCCESS
        assert clipboard[0].startswith(START_MARKER)
        assert capsys.readouterr().out == f"{REPORT_COPIED}\n"

    def test_summarise_with_mock_provider(
        self, dirty_repo: Repo, clipboard: list[str], tmp_path: Path
    ) -> None:
        code = main(
            [
                dirty_repo.working_tree_dir,
                "-s",
                "--provider",
                "mock",
                "--no-refine",
                "--config",
                str(tmp_path / "none.json"),
                "--output",
                "none",
            ]
        )

        assert code == EXIT_SUCCESS
        assert clipboard == ["Mock response for testing"]

    def test_bad_branch_format(
        self,
        dirty_repo: Repo,
        clipboard: list[str],
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(
            [
                dirty_repo.working_tree_dir,
                "--branches",
                "bad-format",
                "--config",
                str(tmp_path / "none.json"),
            ]
        )

        assert code == EXIT_VALIDATION_ERROR
        assert "sourceBranch..targetBranch" in capsys.readouterr().err
        assert clipboard == []

    def test_malformed_config(
        self, dirty_repo: Repo, clipboard: list[str], tmp_path: Path
    ) -> None:
        config = tmp_path / "config.json"
        config.write_text("{oops", encoding="utf-8")

        code = main([dirty_repo.working_tree_dir, "--config", str(config), "--output", "none"])

        assert code == EXIT_VALIDATION_ERROR
        assert clipboard == []

    def test_dialog_output_without_display(
        self,
        dirty_repo: Repo,
        clipboard: list[str],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setitem(sys.modules, "tkinter", None)
        monkeypatch.delenv("DISPLAY", raising=False)

        code = main(
            [
                dirty_repo.working_tree_dir,
                "--config",
                str(tmp_path / "none.json"),
                "--output",
                "dialog",
            ]
        )

        assert code == EXIT_SUCCESS
        assert capsys.readouterr().out == f"{REPORT_COPIED}\n"

    def test_unknown_provider_is_a_validation_error(
        self,
        dirty_repo: Repo,
        clipboard: list[str],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("DIFFCLIP_PROVIDER", "gemini")

        code = main(
            [dirty_repo.working_tree_dir, "--config", str(tmp_path / "none.json"), "--output", "none"]
        )

        assert code == EXIT_VALIDATION_ERROR
        assert clipboard == []
