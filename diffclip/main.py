import argparse
import os
import sys

from loguru import logger

from diffclip.config import DEFAULT_MODELS, load_settings
from diffclip.errors import DiffClipError, exit_code_for
from diffclip.pipeline import DiffClipPipeline, PipelineRequest
from diffclip.tools.delivery.notifier import REPORTERS, Outcome, create_reporter
from diffclip.tools.llm.tool import SUPPORTED_PROVIDERS

LOG_LEVEL_ENV = "DIFFCLIP_LOG_LEVEL"
# The outcome reporter is the user-facing channel; logs stay quiet unless asked for.
DEFAULT_LOG_LEVEL = "CRITICAL"


def _configure_logging(verbose: bool) -> None:
    """Send loguru output to stderr at the requested level."""
    level = "DEBUG" if verbose else os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    logger.remove()
    logger.add(sys.stderr, level=level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diffclip",
        description="Copy a readable git diff report (or an AI commit message) to the clipboard",
    )
    parser.add_argument(
        "directory_path",
        help="The path to the directory within the repository to analyse.",
    )
    parser.add_argument(
        "-s",
        "--summarise",
        "--summarize",
        dest="summarise",
        action="store_true",
        help="Create a summary of the diff and copy to clipboard.",
    )
    parser.add_argument(
        "-b",
        "--branches",
        metavar="SOURCE..TARGET",
        help="Compare two branches. Format: sourceBranch..targetBranch",
    )
    parser.add_argument(
        "--refine",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Run the second, refining turn when summarising (default: on)",
    )
    parser.add_argument(
        "--provider",
        choices=SUPPORTED_PROVIDERS,
        help="LLM provider used for summaries (default: openai)",
    )
    parser.add_argument(
        "--model",
        help=f"Model identifier (default per provider: {DEFAULT_MODELS})",
    )
    parser.add_argument("--config", help="Path to the JSON config file")
    parser.add_argument(
        "--output",
        choices=sorted(REPORTERS),
        default="console",
        help="How the outcome is reported (default: console)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the DiffClip command line.

    Args:
        argv: Optional list of CLI arguments (for testing). If None, sys.argv is used.

    Returns:
        Process exit code: 0 success, 1 validation error, 2 pipeline error.
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    reporter = create_reporter(args.output)

    try:
        settings = load_settings(args.config).with_overrides(
            provider=args.provider, model=args.model, refine=args.refine
        )
    except DiffClipError as e:
        logger.error(f"Invalid configuration: {e}")
        outcome = Outcome.failure(str(e), exit_code_for(e))
        reporter.report(outcome)
        return outcome.exit_code

    logger.info(
        f"DiffClip starting (path={args.directory_path}, branches={args.branches}, "
        f"summarise={args.summarise}, provider={settings.provider})"
    )

    pipeline = DiffClipPipeline(settings=settings, reporter=reporter)
    outcome = pipeline.run(
        PipelineRequest(
            directory_path=args.directory_path,
            ref_spec=args.branches,
            summarise=args.summarise,
        )
    )
    return outcome.exit_code


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
