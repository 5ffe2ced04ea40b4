"""Application configuration using Pydantic Settings"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SYSTEM_PROMPT = (
    "You are a payments analytics assistant. Answer questions about the "
    "merchant's transactions. Use the getTransactions tool to look up "
    "transactions for a date range. Amounts are in minor currency units; "
    "divide by 100 before presenting them."
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "PAYLENS"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"

    @property
    def is_debug(self) -> bool:
        """Debug mode is derived from environment (non-production = debug)."""
        return self.environment != "production"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    # CORS (stored as string, parsed to list)
    cors_origins: str = Field(default="http://localhost:5173")

    # Payments gateway (Paystack studio API)
    paystack_jwt: str = ""
    paystack_endpoint: str = "https://studio-api.paystack.co/transaction?reduced_fields=true"
    paystack_timeout: float = 30.0

    # Transactions dashboard
    transactions_per_page: int = 25
    transactions_default_range_days: int = 30
    display_locale: str = "en_US"

    # Chat assistant
    openai_api_key: str = ""
    openai_base_url: Optional[str] = None  # OpenAI-compatible endpoints
    chat_default_model: str = "gpt-4o"
    chat_max_steps: int = 10
    chat_max_tokens: int = 4096
    chat_temperature: float = 0.3
    chat_timeout: int = 120
    chat_system_prompt: str = DEFAULT_SYSTEM_PROMPT

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """
        Validate critical settings in production environment.

        The gateway token must come from the environment, never a default.
        """
        if self.environment == "production":
            if not self.paystack_jwt.strip():
                raise ValueError(
                    "PAYSTACK_JWT must be explicitly set in production environment."
                )

        return self

    def get_cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
