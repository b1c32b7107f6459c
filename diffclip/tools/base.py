"""
Tools Base Interface

This module defines the common interface that all DiffClip tools follow.
Tools inherit from `BaseTool` so that execution, logging, error classification
and metrics behave the same way for the extractor, formatter, summarizer and
clipboard sink.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any, TypeVar

from loguru import logger

from diffclip.errors import (
    AuthenticationError,
    ClipboardUnavailable,
    EmptyResponse,
    NetworkError,
    RefResolutionError,
    ValidationError,
)

# Generic type for tool input/output
InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class ToolStatus(Enum):
    """Tool execution status values."""

    SUCCESS = "success"
    ERROR = "error"


class ToolErrorCode(Enum):
    """Standard tool error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    REF_RESOLUTION_ERROR = "REF_RESOLUTION_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    EMPTY_RESPONSE = "EMPTY_RESPONSE"
    CLIPBOARD_UNAVAILABLE = "CLIPBOARD_UNAVAILABLE"
    PROCESSING_ERROR = "PROCESSING_ERROR"


@dataclass
class ToolMetrics:
    """Tool execution performance metrics."""

    processing_time_ms: int
    files_processed: int | None = None
    lines_processed: int | None = None


@dataclass
class ToolResult[OutputT]:
    """Standard structure for tool execution results."""

    status: ToolStatus
    output: OutputT | None = None
    error_code: ToolErrorCode | None = None
    error_message: str | None = None
    exception: BaseException | None = None
    metrics: ToolMetrics | None = None

    def __post_init__(self) -> None:
        """Validate result data."""
        if self.status == ToolStatus.ERROR and not self.error_code:
            raise ValueError("error_code is required when status is ERROR")

        if self.status == ToolStatus.SUCCESS and self.output is None:
            logger.warning("Status is SUCCESS but no output provided")

    @property
    def ok(self) -> bool:
        """True when the tool succeeded."""
        return self.status == ToolStatus.SUCCESS

    def unwrap(self) -> OutputT:
        """
        Return the output, or re-raise the error that produced this result.

        Raises:
            The original exception captured by the tool, or RuntimeError when
            the result carries only an error code.
        """
        if self.ok:
            return self.output  # type: ignore[return-value]
        if self.exception is not None:
            raise self.exception
        raise RuntimeError(self.error_message or "Tool execution failed")

    @classmethod
    def success(
        cls,
        output: OutputT,
        metrics: ToolMetrics | None = None,
    ) -> "ToolResult[OutputT]":
        """Create success result."""
        return cls(
            status=ToolStatus.SUCCESS,
            output=output,
            metrics=metrics,
        )

    @classmethod
    def error(
        cls,
        error_code: ToolErrorCode,
        error_message: str,
        exception: BaseException | None = None,
        metrics: ToolMetrics | None = None,
    ) -> "ToolResult[OutputT]":
        """Create error result."""
        return cls(
            status=ToolStatus.ERROR,
            error_code=error_code,
            error_message=error_message,
            exception=exception,
            metrics=metrics,
        )


class BaseTool[InputT, OutputT](ABC):
    """
    Base class for all tools.

    All tools that inherit from this class share one interface and one
    error-handling path.
    """

    def __init__(self, tool_name: str) -> None:
        """Initialize the tool."""
        self.tool_name = tool_name
        self.tool_id = f"{tool_name}_{uuid.uuid4().hex[:8]}"
        self.start_time: datetime | None = None

    @abstractmethod
    def execute(self, input_data: InputT) -> ToolResult[OutputT]:
        """
        Main method for tool execution.

        Args:
            input_data: Input data required for tool execution

        Returns:
            Tool execution result
        """
        pass

    def _start_execution(self) -> None:
        """Record execution start time."""
        self.start_time = datetime.now(UTC)

    def _end_execution(self) -> int:
        """Calculate execution end and processing time (milliseconds)."""
        if not self.start_time:
            return 0

        end_time = datetime.now(UTC)
        duration = (end_time - self.start_time).total_seconds() * 1000
        return int(duration)

    def _create_metrics(self, **kwargs: Any) -> ToolMetrics:
        """Create metrics object."""
        processing_time = self._end_execution()
        return ToolMetrics(processing_time_ms=processing_time, **kwargs)

    def _log_execution_start(self) -> None:
        """Log execution start."""
        logger.debug(f"Tool {self.tool_name} execution started: {self.tool_id}")

    def _log_execution_success(self, result: ToolResult[OutputT]) -> None:
        """Log execution success."""
        logger.debug(f"Tool {self.tool_name} execution successful: {self.tool_id}")
        if result.metrics:
            logger.debug(f"Processing time: {result.metrics.processing_time_ms}ms")

    def _log_execution_error(self, error: BaseException, error_code: ToolErrorCode) -> None:
        """Log execution error."""
        logger.error(f"Tool {self.tool_name} execution failed: {self.tool_id}")
        logger.error(f"Error code: {error_code.value}")
        logger.error(f"Error message: {str(error)}")

    def _error_result(self, error: BaseException) -> ToolResult[OutputT]:
        """Build an error result for `error` and log it."""
        error_code = self._classify_error(error)
        self._log_execution_error(error, error_code)
        return ToolResult.error(
            error_code=error_code,
            error_message=str(error),
            exception=error,
            metrics=self._create_metrics(),
        )

    def run(self, input_data: InputT) -> ToolResult[OutputT]:
        """
        Wrapper method for tool execution.

        This method handles common logging, error handling, and metrics collection.

        Args:
            input_data: Input data required for tool execution

        Returns:
            Tool execution result
        """
        try:
            self._start_execution()
            self._log_execution_start()

            result = self.execute(input_data)

            if not result.metrics:
                result.metrics = self._create_metrics()

            if result.ok:
                self._log_execution_success(result)
            return result

        except Exception as e:
            return self._error_result(e)

    def _classify_error(self, error: BaseException) -> ToolErrorCode:
        """Classify error into standard error codes."""

        if isinstance(error, ValidationError):
            return ToolErrorCode.VALIDATION_ERROR
        elif isinstance(error, RefResolutionError):
            return ToolErrorCode.REF_RESOLUTION_ERROR
        elif isinstance(error, AuthenticationError):
            return ToolErrorCode.AUTHENTICATION_ERROR
        elif isinstance(error, NetworkError):
            return ToolErrorCode.NETWORK_ERROR
        elif isinstance(error, EmptyResponse):
            return ToolErrorCode.EMPTY_RESPONSE
        elif isinstance(error, ClipboardUnavailable):
            return ToolErrorCode.CLIPBOARD_UNAVAILABLE
        else:
            return ToolErrorCode.PROCESSING_ERROR

