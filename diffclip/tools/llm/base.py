"""
LLM provider base interface and data structures.

This module defines the base interface that all LLM providers implement and
the `Conversation` used to run multi-turn chat exchanges against them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from loguru import logger


@dataclass
class LLMConfig:
    """
    LLM provider configuration structure.

    Contains API key, model settings and sampling parameters.
    """

    api_key: str  # API key
    model: str  # Model name
    base_url: str | None = None  # Custom API endpoint
    timeout: int = 60  # Request timeout (seconds)
    max_tokens: int = 1024  # Maximum token count
    temperature: float = 0.0  # Generation temperature (deterministic)
    top_p: float = 1.0  # Nucleus sampling parameter


@dataclass
class LLMMessage:
    """
    LLM conversation message structure.
    """

    role: str  # 'system', 'user', 'assistant'
    content: str  # Message content

    def to_dict(self) -> dict[str, Any]:
        """Convert message to dictionary."""
        return {"role": self.role, "content": self.content}


@dataclass
class LLMUsage:
    """
    LLM API usage information.
    """

    prompt_tokens: int  # Number of prompt tokens
    completion_tokens: int  # Number of completion tokens
    total_tokens: int  # Total token count


@dataclass
class LLMResponse:
    """
    LLM API response structure.
    """

    content: str  # Generated content
    usage: LLMUsage  # Token usage
    model: str  # Model used
    finish_reason: str | None  # Generation completion reason


class LLMProvider(ABC):
    """
    Base interface for LLM providers.

    Implementations translate SDK failures into `AuthenticationError` and
    `NetworkError` from `diffclip.errors`.
    """

    def __init__(self, config: LLMConfig):
        self.config = config
        self.provider_name = self.__class__.__name__

    @abstractmethod
    async def generate(self, messages: list[LLMMessage], **kwargs: Any) -> LLMResponse:
        """
        Generate text using LLM.

        Args:
            messages: List of conversation messages
            **kwargs: Additional parameters

        Returns:
            LLM response
        """
        pass

    def estimate_tokens(self, text: str) -> int:
        """
        Estimate token count for text.

        Args:
            text: Text to analyze

        Returns:
            Estimated token count
        """
        # Simple estimation: 1 token is roughly 4 characters for English
        return len(text) // 4


@dataclass
class Conversation:
    """
    A chat conversation held against one provider.

    Each call to `get_response` is one round-trip: the whole history is sent
    and the reply is appended as an assistant message.
    """

    provider: LLMProvider
    messages: list[LLMMessage] = field(default_factory=list)
    round_trips: int = 0

    def append_system_message(self, content: str) -> None:
        self.messages.append(LLMMessage(role="system", content=content))

    def append_user_input(self, content: str) -> None:
        self.messages.append(LLMMessage(role="user", content=content))

    async def get_response(self, **kwargs: Any) -> str:
        """Send the conversation and return the reply text."""
        response = await self.provider.generate(list(self.messages), **kwargs)
        self.round_trips += 1
        logger.debug(
            f"Round-trip {self.round_trips} via {self.provider.provider_name}: "
            f"{response.usage.total_tokens} tokens, finish_reason={response.finish_reason}"
        )
        self.messages.append(LLMMessage(role="assistant", content=response.content))
        return response.content
