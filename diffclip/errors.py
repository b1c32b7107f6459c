"""
Error taxonomy for DiffClip.

Every failure raised by the extractor, formatter, summarizer or delivery sink
derives from `DiffClipError`. The pipeline catches these at the top level and
turns them into one user-facing message plus an exit code.
"""

EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 1
EXIT_PIPELINE_ERROR = 2


class DiffClipError(Exception):
    """Base class for all DiffClip errors."""

    exit_code: int = EXIT_PIPELINE_ERROR


class ValidationError(DiffClipError):
    """Bad input: path, ref-spec or repository."""

    exit_code = EXIT_VALIDATION_ERROR


class InvalidRepository(ValidationError):
    """The path is not a usable git working copy."""


class InvalidRefSpec(ValidationError):
    """A ref-spec that is not of the form `source..target`."""


class RefResolutionError(DiffClipError):
    """A named ref could not be resolved."""

    exit_code = EXIT_VALIDATION_ERROR


class RefNotFound(RefResolutionError):
    """A branch, tag or commit id that does not exist in the repository."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"Ref not found: {ref}")
        self.ref = ref


class PipelineError(DiffClipError):
    """Failure after the report has been produced."""

    exit_code = EXIT_PIPELINE_ERROR


class SummarizationError(PipelineError):
    """The commit-message summary could not be produced."""


class AuthenticationError(SummarizationError):
    """The model provider rejected (or was never given) a credential."""


class NetworkError(SummarizationError):
    """Transport or service failure while talking to the model provider."""


class EmptyResponse(SummarizationError):
    """The model provider returned no text."""


class ClipboardUnavailable(PipelineError):
    """The system clipboard could not be written."""


def exit_code_for(error: BaseException) -> int:
    """Map an exception to the process exit code."""
    if isinstance(error, DiffClipError):
        return error.exit_code
    return EXIT_PIPELINE_ERROR
