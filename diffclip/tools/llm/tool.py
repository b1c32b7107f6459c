"""
Commit-message summarizer.

Sends a diff report to a chat-completion provider and returns a commit
message. The exchange is a fixed protocol: one system instruction, a draft
turn embedding the report, and an optional refine turn whose reply replaces
the draft.
"""

import asyncio
from dataclasses import dataclass

from loguru import logger

from diffclip.errors import DiffClipError, EmptyResponse
from diffclip.tools.base import BaseTool, ToolResult
from diffclip.tools.llm.base import Conversation, LLMConfig, LLMProvider
from diffclip.tools.llm.prompts import PromptManager, PromptTemplate

SUPPORTED_PROVIDERS = ("openai", "anthropic", "mock")


@dataclass
class SummaryRequest:
    """Summarization request: the rendered report to condense."""

    report: str


class CommitMessageSummarizer(BaseTool[SummaryRequest, str]):
    """
    Turns a diff report into a commit message.

    With `refine` enabled two round-trips are made (draft, then refine) and
    the second reply is the result; otherwise the draft is the result.
    """

    def __init__(
        self,
        provider: LLMProvider,
        refine: bool = True,
        prompt_manager: PromptManager | None = None,
    ):
        super().__init__("commit_message_summarizer")

        self.provider = provider
        self.refine = refine
        self.prompt_manager = prompt_manager or PromptManager()

    def execute(self, input_data: SummaryRequest) -> ToolResult[str]:
        """
        Run the summarization to completion.

        Args:
            input_data: Request holding the report text

        Returns:
            Tool result with the commit message
        """
        try:
            summary = asyncio.run(self.summarize(input_data.report))
        except DiffClipError as e:
            return self._error_result(e)

        return ToolResult.success(output=summary, metrics=self._create_metrics())

    async def summarize(self, report: str) -> str:
        """
        Produce a commit message for `report`.

        Args:
            report: Rendered diff report, embedded verbatim in the prompt

        Returns:
            Final reply text

        Raises:
            AuthenticationError: Credential missing or rejected
            NetworkError: Transport or service failure
            EmptyResponse: The final reply is empty
        """
        draft_template = self._template("commit_message")
        system_prompt, draft_prompt = draft_template.render(report=report)

        conversation = Conversation(provider=self.provider)
        conversation.append_system_message(system_prompt)
        conversation.append_user_input(draft_prompt)

        logger.info(
            f"Requesting commit message from {self.provider.provider_name} "
            f"({self.provider.config.model}, refine={self.refine})"
        )
        summary = await conversation.get_response()

        if self.refine:
            _, refine_prompt = self._template("refine_commit_message").render()
            conversation.append_user_input(refine_prompt)
            summary = await conversation.get_response()

        if not summary or not summary.strip():
            raise EmptyResponse(
                f"{self.provider.provider_name} returned an empty commit message"
            )

        logger.info(f"Commit message received after {conversation.round_trips} round-trips")
        return summary

    def _template(self, name: str) -> PromptTemplate:
        template = self.prompt_manager.get_template(name)
        if not template:
            raise ValueError(f"Unknown prompt template: {name}")
        return template


def create_provider(provider_config: LLMConfig, provider_type: str = "openai") -> LLMProvider:
    """
    Factory function to create an LLM provider.

    Args:
        provider_config: LLM provider configuration
        provider_type: Type of provider ('openai', 'anthropic', 'mock')

    Returns:
        Provider instance
    """
    if provider_type == "openai":
        from .providers import OpenAIProvider

        return OpenAIProvider(provider_config)
    elif provider_type == "anthropic":
        from .providers import AnthropicProvider

        return AnthropicProvider(provider_config)
    elif provider_type == "mock":
        from .providers import MockProvider

        return MockProvider(provider_config)
    else:
        raise ValueError(f"Unsupported provider type: {provider_type}")


def create_summarizer(
    provider_config: LLMConfig, provider_type: str = "openai", refine: bool = True
) -> CommitMessageSummarizer:
    """
    Factory function to create a summarizer with the specified provider.

    Args:
        provider_config: LLM provider configuration
        provider_type: Type of provider ('openai', 'anthropic', 'mock')
        refine: Whether to run the second, refining turn

    Returns:
        Configured summarizer instance
    """
    provider = create_provider(provider_config, provider_type)
    return CommitMessageSummarizer(provider=provider, refine=refine)


__all__ = [
    "SUPPORTED_PROVIDERS",
    "CommitMessageSummarizer",
    "SummaryRequest",
    "create_provider",
    "create_summarizer",
]
