"""
Chat model clients (OpenAI and OpenAI-compatible servers).

Usage:
    from app.services.ai import create_chat_client

    client = create_chat_client("openai:gpt-4o")
    response = await client.chat(messages, tools=tools)
"""

from .base import (
    AIAuthenticationError,
    AIClientConfig,
    AIClientError,
    AIConnectionError,
    AIInvalidRequestError,
    AIProvider,
    AIRateLimitError,
    AIResponse,
    BaseAIClient,
    ToolCall,
)
from .factory import create_chat_client, parse_model_id

__all__ = [
    "AIAuthenticationError",
    "AIClientConfig",
    "AIClientError",
    "AIConnectionError",
    "AIInvalidRequestError",
    "AIProvider",
    "AIRateLimitError",
    "AIResponse",
    "BaseAIClient",
    "ToolCall",
    "create_chat_client",
    "parse_model_id",
]
