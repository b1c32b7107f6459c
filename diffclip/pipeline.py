"""
DiffClip pipeline.

Runs the stages strictly in order: extract changes, render the report,
optionally summarize it, copy the result to the clipboard. Any failure stops
the pipeline and becomes a single `Outcome`; nothing partial is delivered.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

from diffclip.config import Settings
from diffclip.errors import DiffClipError, exit_code_for
from diffclip.tools.delivery.clipboard import ClipboardSink
from diffclip.tools.delivery.notifier import Outcome, OutcomeReporter, ReturnCodeReporter
from diffclip.tools.git.git_changes import GitAnalysisInput, GitChangeDetector
from diffclip.tools.llm.tool import CommitMessageSummarizer, SummaryRequest, create_summarizer
from diffclip.tools.report.formatter import ReportFormatter

REPORT_COPIED = "Git diff has been copied to the clipboard."
SUMMARY_COPIED = "Diff summary copied to clipboard."


@dataclass
class PipelineRequest:
    """One invocation's inputs."""

    directory_path: str
    ref_spec: str | None = None
    summarise: bool = False


def _summarizer_from_settings(settings: Settings) -> CommitMessageSummarizer:
    return create_summarizer(
        settings.llm_config(), provider_type=settings.provider, refine=settings.refine
    )


class DiffClipPipeline:
    """
    Sequential extract → format → (summarize) → deliver pipeline.

    Collaborators can be injected for tests; the summarizer is built lazily
    from settings only when a summary is requested.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        reporter: OutcomeReporter | None = None,
        detector: GitChangeDetector | None = None,
        formatter: ReportFormatter | None = None,
        sink: ClipboardSink | None = None,
        summarizer_factory: Callable[[Settings], CommitMessageSummarizer] | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.reporter = reporter or ReturnCodeReporter()
        self.detector = detector or GitChangeDetector()
        self.formatter = formatter or ReportFormatter()
        self.sink = sink or ClipboardSink()
        self.summarizer_factory = summarizer_factory or _summarizer_from_settings

    def run(self, request: PipelineRequest) -> Outcome:
        """
        Run the pipeline and report its outcome.

        Args:
            request: Directory, ref-spec and summarise flag

        Returns:
            The outcome that was handed to the reporter
        """
        try:
            outcome = Outcome.success(self._execute(request))
        except DiffClipError as e:
            logger.error(f"DiffClip failed: {e}")
            outcome = Outcome.failure(str(e), exit_code_for(e))
        except Exception as e:
            logger.exception(f"Unexpected error: {e}")
            outcome = Outcome.failure(str(e), exit_code_for(e))

        self.reporter.report(outcome)
        return outcome

    def _execute(self, request: PipelineRequest) -> str:
        """Run every stage; return the success message."""
        change_set = self.detector.run(
            GitAnalysisInput(repo_path=request.directory_path, ref_spec=request.ref_spec)
        ).unwrap()

        report = self.formatter.run(change_set).unwrap()

        if request.summarise:
            summarizer = self.summarizer_factory(self.settings)
            text = summarizer.run(SummaryRequest(report=report)).unwrap()
            message = SUMMARY_COPIED
        else:
            text = report
            message = REPORT_COPIED

        self.sink.run(text).unwrap()
        return message
