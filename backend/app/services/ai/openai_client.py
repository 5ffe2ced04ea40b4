"""
OpenAI chat client.

Implements BaseAIClient on the OpenAI Chat Completions API, including
function calling. ``CustomOpenAIClient`` points the same SDK at any
OpenAI-compatible server.
"""

import time
from typing import Any, Optional

from .base import (
    AIClientConfig,
    AIClientError,
    AIAuthenticationError,
    AIRateLimitError,
    AIConnectionError,
    AIInvalidRequestError,
    AIProvider,
    AIResponse,
    BaseAIClient,
    ToolCall,
)

# Lazy import to avoid hard dependency
openai = None


def _get_openai():
    """Lazy load openai module."""
    global openai
    if openai is None:
        try:
            import openai as _openai

            openai = _openai
        except ImportError:
            raise AIClientError(
                "openai package not installed. Install with: pip install openai",
                AIProvider.OPENAI,
            )
    return openai


class OpenAIClient(BaseAIClient):
    """
    OpenAI GPT client (gpt-4o, gpt-4o-mini, ...).

    Usage:
        client = OpenAIClient(AIClientConfig(api_key="...", model="gpt-4o"))
        response = await client.chat(messages, tools=tools)
    """

    def __init__(self, config: AIClientConfig):
        super().__init__(config)

        client_kwargs: dict[str, Any] = {
            "api_key": config.api_key,
            "timeout": config.timeout,
        }
        if config.base_url:
            client_kwargs["base_url"] = config.base_url

        self._client = _get_openai().AsyncOpenAI(**client_kwargs)

    @property
    def provider(self) -> AIProvider:
        return AIProvider.OPENAI

    def _map_error(self, error: Exception) -> AIClientError:
        """Translate an SDK exception into the AIClientError hierarchy."""
        _openai = _get_openai()
        if isinstance(error, _openai.BadRequestError):
            return AIInvalidRequestError(f"Bad request: {error}", self.provider)
        if isinstance(error, _openai.AuthenticationError):
            return AIAuthenticationError(f"Authentication failed: {error}", self.provider)
        if isinstance(error, _openai.RateLimitError):
            return AIRateLimitError(f"Rate limit exceeded: {error}", self.provider)
        if isinstance(error, _openai.APIConnectionError):
            return AIConnectionError(f"Connection failed: {error}", self.provider)
        if isinstance(error, _openai.APIStatusError):
            return AIClientError(f"API error: {error}", self.provider)
        return AIClientError(f"Unexpected error: {error}", self.provider)

    @staticmethod
    def _parse_tool_calls(message: Any) -> list[ToolCall]:
        return [
            ToolCall(
                id=call.id,
                name=call.function.name,
                arguments=call.function.arguments or "{}",
            )
            for call in (message.tool_calls or [])
        ]

    async def chat(
        self,
        messages: list[dict[str, Any]],
        tools: Optional[list[dict[str, Any]]] = None,
    ) -> AIResponse:
        start_time = time.time()
        request_kwargs: dict[str, Any] = {
            "model": self.config.model,
            "messages": messages,
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
            **self.config.extra_params,
        }
        if tools:
            request_kwargs["tools"] = tools

        try:
            response = await self._client.chat.completions.create(**request_kwargs)
        except Exception as e:
            raise self._map_error(e) from e

        choice = response.choices[0]
        input_tokens = response.usage.prompt_tokens if response.usage else 0
        output_tokens = response.usage.completion_tokens if response.usage else 0

        return AIResponse(
            content=choice.message.content or "",
            model=response.model,
            provider=self.provider,
            tokens_used=input_tokens + output_tokens,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            stop_reason=choice.finish_reason or "",
            latency_ms=int((time.time() - start_time) * 1000),
            tool_calls=self._parse_tool_calls(choice.message),
            raw_response=response,
        )


class CustomOpenAIClient(OpenAIClient):
    """
    OpenAI-compatible endpoint client (vLLM, Ollama, LiteLLM, ...).

    Requires ``base_url``; the API key may be empty for local servers.
    """

    def _validate_config(self) -> None:
        if not self.config.base_url:
            raise AIClientError(
                "base_url is required for custom OpenAI-compatible endpoints",
                AIProvider.CUSTOM,
            )
        if not self.config.api_key:
            self.config.api_key = "not-needed"

    @property
    def provider(self) -> AIProvider:
        return AIProvider.CUSTOM
