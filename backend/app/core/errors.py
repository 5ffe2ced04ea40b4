"""
Application errors.

Error codes shared by the API, the ``AppError`` base carried by service-level
failures, and helpers that turn failures into client-safe messages (details
are only exposed outside production).
"""

import logging
from enum import Enum
from typing import Any, Optional

from fastapi import HTTPException, status

from .config import get_settings

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Machine-readable error codes returned to API clients"""

    # Payments gateway
    GATEWAY_ERROR = "GATEWAY_ERROR"
    GATEWAY_NOT_CONFIGURED = "GATEWAY_NOT_CONFIGURED"
    GATEWAY_INVALID_RESPONSE = "GATEWAY_INVALID_RESPONSE"

    # Chat model provider
    AI_SERVICE_ERROR = "AI_SERVICE_ERROR"

    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppError(Exception):
    """
    Structured application error.

    Args:
        code: Error code for machine-readable identification
        message: Message that is safe to show to users
        status_code: HTTP status the API answers with
        details: Extra context for the response body
        internal_message: Logged only, never returned to clients
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[dict[str, Any]] = None,
        internal_message: Optional[str] = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.internal_message = internal_message
        super().__init__(message)


def sanitize_error_message(
    error: Exception,
    user_message: str = "An unexpected error occurred",
    include_type: bool = False,
) -> str:
    """
    Message for ``error`` that is safe to return to a client.

    Production gets ``user_message``; other environments get the error text
    (prefixed with the exception type when ``include_type`` is set).
    """
    if get_settings().environment == "production":
        return user_message

    if include_type:
        return f"{type(error).__name__}: {error}"
    return str(error)


def create_http_exception(
    code: ErrorCode,
    user_message: str,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    internal_error: Optional[Exception] = None,
    log_error: bool = True,
) -> HTTPException:
    """
    Build an HTTPException, logging the underlying error.

    The internal error text is appended to the detail outside production.
    """
    if log_error:
        if internal_error:
            logger.error(f"[{code.value}] {user_message}: {internal_error}", exc_info=True)
        else:
            logger.error(f"[{code.value}] {user_message}")

    detail = user_message
    if internal_error and get_settings().environment != "production":
        detail = f"{user_message}: {internal_error}"

    return HTTPException(status_code=status_code, detail=detail)


def ai_service_error(error: Exception) -> HTTPException:
    """503 for chat model provider failures"""
    return create_http_exception(
        code=ErrorCode.AI_SERVICE_ERROR,
        user_message="AI service temporarily unavailable. Please try again later.",
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        internal_error=error,
    )
