"""
AI Client Factory.

Creates chat clients from application settings. Model identifiers may carry
a provider prefix (``openai:gpt-4o``, ``custom:llama-3.1-70b``); a bare model
id uses the custom provider when an OpenAI-compatible base URL is configured
and OpenAI otherwise.
"""

import logging
from typing import Optional

from ...core.config import Settings, get_settings
from .base import AIClientConfig, AIClientError, AIProvider, BaseAIClient
from .openai_client import CustomOpenAIClient, OpenAIClient

logger = logging.getLogger(__name__)

# Client class registry
_CLIENT_CLASSES: dict[AIProvider, type[BaseAIClient]] = {
    AIProvider.OPENAI: OpenAIClient,
    AIProvider.CUSTOM: CustomOpenAIClient,
}


def parse_model_id(model: str, settings: Settings) -> tuple[AIProvider, str]:
    """Split an optional ``provider:`` prefix off a model identifier."""
    if ":" in model:
        provider_str, model_id = model.split(":", 1)
        try:
            return AIProvider(provider_str), model_id
        except ValueError:
            raise AIClientError(f"Unknown provider: {provider_str}")

    provider = AIProvider.CUSTOM if settings.openai_base_url else AIProvider.OPENAI
    return provider, model


def create_chat_client(
    model: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> BaseAIClient:
    """
    Create a chat client for ``model`` (default: ``chat_default_model``).

    Raises:
        AIClientError: Unknown provider or missing credentials
    """
    settings = settings or get_settings()
    provider, model_id = parse_model_id(model or settings.chat_default_model, settings)

    config = AIClientConfig(
        api_key=settings.openai_api_key,
        model=model_id,
        base_url=settings.openai_base_url if provider == AIProvider.CUSTOM else None,
        max_tokens=settings.chat_max_tokens,
        temperature=settings.chat_temperature,
        timeout=settings.chat_timeout,
    )

    client_class = _CLIENT_CLASSES[provider]
    logger.debug(f"Creating {provider.value} chat client for model {model_id}")
    return client_class(config)
