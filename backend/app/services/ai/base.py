"""
Chat model client interface.

Provider adapters implement ``chat`` (one completion step, optionally with
function tools) on top of the shared config, response and error types.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class AIProvider(str, Enum):
    OPENAI = "openai"
    CUSTOM = "custom"  # OpenAI-compatible servers


@dataclass
class AIClientConfig:
    api_key: str
    model: str
    base_url: Optional[str] = None
    max_tokens: int = 4096
    temperature: float = 0.7
    timeout: int = 120
    extra_params: dict = field(default_factory=dict)  # Passed through to the provider


@dataclass
class ToolCall:
    """A function call requested by the model"""

    id: str
    name: str
    arguments: str  # JSON text as produced by the model, unparsed


@dataclass
class AIResponse:
    """One completion step, normalized across providers"""

    content: str
    model: str
    provider: AIProvider
    tokens_used: int
    input_tokens: int
    output_tokens: int
    stop_reason: str = ""
    latency_ms: int = 0
    tool_calls: list[ToolCall] = field(default_factory=list)
    raw_response: Optional[Any] = None


class AIClientError(Exception):
    """Base error for chat model failures"""

    def __init__(self, message: str, provider: Optional[AIProvider] = None):
        self.message = message
        self.provider = provider
        super().__init__(message)


class AIAuthenticationError(AIClientError):
    pass


class AIRateLimitError(AIClientError):
    pass


class AIConnectionError(AIClientError):
    pass


class AIInvalidRequestError(AIClientError):
    pass


class BaseAIClient(ABC):
    """
    Abstract chat model client.

    Usage:
        response = await client.chat(messages, tools=[GET_TRANSACTIONS_TOOL])
        for call in response.tool_calls:
            ...
    """

    def __init__(self, config: AIClientConfig):
        self.config = config
        self._validate_config()

    def _validate_config(self) -> None:
        """Override for provider-specific validation."""
        if not self.config.api_key:
            raise AIClientError(f"API key is required for {self.provider.value}")

    @property
    @abstractmethod
    def provider(self) -> AIProvider:
        pass

    @abstractmethod
    async def chat(
        self,
        messages: list[dict[str, Any]],
        tools: Optional[list[dict[str, Any]]] = None,
    ) -> AIResponse:
        """
        Run one completion step.

        Args:
            messages: OpenAI-format messages (system/user/assistant/tool)
            tools: Function tool definitions the model may call

        Raises:
            AIClientError: On any provider failure
        """
        pass
