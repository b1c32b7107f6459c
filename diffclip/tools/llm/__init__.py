"""
LLM integration tools.

This package wraps chat-completion providers (OpenAI, Anthropic, mock) and
uses them to condense diff reports into commit messages.
"""

from .base import Conversation, LLMConfig, LLMMessage, LLMProvider, LLMResponse
from .prompts import PromptManager, PromptTemplate
from .providers import AnthropicProvider, MockProvider, OpenAIProvider
from .tool import (
    SUPPORTED_PROVIDERS,
    CommitMessageSummarizer,
    SummaryRequest,
    create_provider,
    create_summarizer,
)

__all__ = [
    "Conversation",
    "LLMProvider",
    "LLMConfig",
    "LLMMessage",
    "LLMResponse",
    "CommitMessageSummarizer",
    "SummaryRequest",
    "SUPPORTED_PROVIDERS",
    "create_provider",
    "create_summarizer",
    "OpenAIProvider",
    "AnthropicProvider",
    "MockProvider",
    "PromptTemplate",
    "PromptManager",
]
