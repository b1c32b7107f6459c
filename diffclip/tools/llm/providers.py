"""
LLM provider implementations.

Contains implementations for OpenAI, Anthropic and a mock provider used in
tests. SDK clients are created with retries disabled: a failed round-trip
ends the summarization.
"""

from typing import Any

import anthropic
import openai
from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from diffclip.errors import AuthenticationError, NetworkError

from .base import LLMConfig, LLMMessage, LLMProvider, LLMResponse, LLMUsage


def _require_api_key(config: LLMConfig, provider: str) -> None:
    if not config.api_key:
        raise AuthenticationError(f"No API key configured for {provider}")


class OpenAIProvider(LLMProvider):
    """
    OpenAI LLM provider implementation.

    Supports GPT-3.5-turbo, GPT-4 and other chat completion models.
    """

    def __init__(self, config: LLMConfig):
        super().__init__(config)
        _require_api_key(config, "OpenAI")
        self.client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            max_retries=0,
        )

    async def generate(self, messages: list[LLMMessage], **kwargs: Any) -> LLMResponse:
        """Generate text using OpenAI API."""
        openai_messages = [msg.to_dict() for msg in messages]

        request_params = {
            "model": self.config.model,
            "messages": openai_messages,
            "max_tokens": kwargs.get("max_tokens", self.config.max_tokens),
            "temperature": kwargs.get("temperature", self.config.temperature),
            "top_p": kwargs.get("top_p", self.config.top_p),
        }

        try:
            response = await self.client.chat.completions.create(**request_params)
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise AuthenticationError(f"OpenAI rejected the API key: {e}") from e
        except openai.APIConnectionError as e:
            raise NetworkError(f"Could not reach OpenAI: {e}") from e
        except openai.APIError as e:
            raise NetworkError(f"OpenAI API call failed: {e}") from e

        choice = response.choices[0]
        usage = response.usage

        return LLMResponse(
            content=choice.message.content or "",
            usage=LLMUsage(
                prompt_tokens=usage.prompt_tokens if usage else 0,
                completion_tokens=usage.completion_tokens if usage else 0,
                total_tokens=usage.total_tokens if usage else 0,
            ),
            model=response.model,
            finish_reason=choice.finish_reason,
        )


class AnthropicProvider(LLMProvider):
    """
    Anthropic LLM provider implementation.

    Supports Claude models.
    """

    def __init__(self, config: LLMConfig):
        super().__init__(config)
        _require_api_key(config, "Anthropic")
        self.client = AsyncAnthropic(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            max_retries=0,
        )

    async def generate(self, messages: list[LLMMessage], **kwargs: Any) -> LLMResponse:
        """Generate text using Anthropic API."""
        # Separate system message
        system_message = None
        chat_messages = []

        for msg in messages:
            if msg.role == "system":
                system_message = msg.content
            else:
                chat_messages.append(msg.to_dict())

        request_params: dict[str, Any] = {
            "model": self.config.model,
            "messages": chat_messages,
            "max_tokens": kwargs.get("max_tokens", self.config.max_tokens),
            "temperature": kwargs.get("temperature", self.config.temperature),
        }

        if system_message:
            request_params["system"] = system_message

        try:
            response = await self.client.messages.create(**request_params)
        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as e:
            raise AuthenticationError(f"Anthropic rejected the API key: {e}") from e
        except anthropic.APIConnectionError as e:
            raise NetworkError(f"Could not reach Anthropic: {e}") from e
        except anthropic.APIError as e:
            raise NetworkError(f"Anthropic API call failed: {e}") from e

        usage = response.usage
        text = "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )

        return LLMResponse(
            content=text,
            usage=LLMUsage(
                prompt_tokens=usage.input_tokens,
                completion_tokens=usage.output_tokens,
                total_tokens=usage.input_tokens + usage.output_tokens,
            ),
            model=response.model,
            finish_reason=response.stop_reason,
        )


class MockProvider(LLMProvider):
    """
    Mock LLM provider for testing.

    Returns predefined responses in order without actual API calls and keeps
    every request it received in `requests`.
    """

    def __init__(self, config: LLMConfig, mock_responses: list[str] | None = None):
        super().__init__(config)
        self.mock_responses = mock_responses or ["Mock response for testing"]
        self.response_index = 0
        self.requests: list[list[LLMMessage]] = []

    async def generate(self, messages: list[LLMMessage], **kwargs: Any) -> LLMResponse:
        """Generate mock response."""
        self.requests.append(list(messages))

        prompt_text = " ".join([msg.content for msg in messages])
        prompt_tokens = self.estimate_tokens(prompt_text)

        response_text = self.mock_responses[
            self.response_index % len(self.mock_responses)
        ]
        completion_tokens = self.estimate_tokens(response_text)

        self.response_index += 1

        return LLMResponse(
            content=response_text,
            usage=LLMUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens,
            ),
            model="mock-model",
            finish_reason="stop",
        )
