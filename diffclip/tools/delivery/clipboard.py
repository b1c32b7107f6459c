"""
Clipboard delivery sink.

Places the final text on the system clipboard exactly as given.
"""

from __future__ import annotations

import pyperclip
from loguru import logger

from diffclip.errors import ClipboardUnavailable
from diffclip.tools.base import BaseTool, ToolResult


class ClipboardSink(BaseTool[str, str]):
    """Copies text to the system clipboard via pyperclip."""

    def __init__(self) -> None:
        super().__init__("ClipboardSink")

    def execute(self, input_data: str) -> ToolResult[str]:
        try:
            self.deliver(input_data)
        except ClipboardUnavailable as e:
            return self._error_result(e)
        return ToolResult.success(output=input_data, metrics=self._create_metrics())

    def deliver(self, text: str) -> None:
        """Copy `text` to the clipboard.

        Raises:
            ClipboardUnavailable: No clipboard mechanism is available or the
                copy failed.
        """
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise ClipboardUnavailable(f"Could not copy to clipboard: {e}") from e

        logger.info(f"Copied {len(text)} characters to the clipboard")
