"""
Tests for app.core.errors module.

Covers ErrorCode, AppError, sanitize_error_message, create_http_exception,
and pre-built error helpers.
"""

from unittest.mock import patch, MagicMock

import pytest
from fastapi import HTTPException, status

from app.core.errors import (
    AppError,
    ErrorCode,
    ai_service_error,
    create_http_exception,
    sanitize_error_message,
)


def _mock_settings(env):
    mock = MagicMock()
    mock.environment = env
    return mock


# ======================== ErrorCode ========================

class TestErrorCode:
    def test_gateway_codes(self):
        assert ErrorCode.GATEWAY_ERROR == "GATEWAY_ERROR"
        assert ErrorCode.GATEWAY_NOT_CONFIGURED == "GATEWAY_NOT_CONFIGURED"
        assert ErrorCode.GATEWAY_INVALID_RESPONSE == "GATEWAY_INVALID_RESPONSE"

    def test_all_codes_are_strings(self):
        for code in ErrorCode:
            assert isinstance(code.value, str)


# ======================== AppError ========================

class TestAppError:
    def test_basic_creation(self):
        err = AppError(
            code=ErrorCode.INTERNAL_ERROR,
            message="Something went wrong",
        )
        assert err.code == ErrorCode.INTERNAL_ERROR
        assert err.message == "Something went wrong"
        assert err.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert err.details == {}
        assert err.internal_message is None

    def test_with_all_fields(self):
        err = AppError(
            code=ErrorCode.GATEWAY_ERROR,
            message="Gateway error",
            status_code=status.HTTP_502_BAD_GATEWAY,
            details={"gateway": "paystack"},
            internal_message="Connection refused at 10.0.0.1:443",
        )
        assert err.status_code == 502
        assert err.details == {"gateway": "paystack"}
        assert err.internal_message == "Connection refused at 10.0.0.1:443"

    def test_is_exception(self):
        err = AppError(code=ErrorCode.INTERNAL_ERROR, message="test")
        assert isinstance(err, Exception)
        assert str(err) == "test"


# ======================== sanitize_error_message ========================

class TestSanitizeErrorMessage:
    def test_production_returns_user_message(self):
        with patch("app.core.errors.get_settings", return_value=_mock_settings("production")):
            result = sanitize_error_message(
                ValueError("secret details"),
                user_message="An error occurred",
            )
            assert result == "An error occurred"
            assert "secret details" not in result

    def test_development_returns_error_string(self):
        with patch("app.core.errors.get_settings", return_value=_mock_settings("development")):
            result = sanitize_error_message(ValueError("detailed error info"))
            assert result == "detailed error info"

    def test_development_with_type(self):
        with patch("app.core.errors.get_settings", return_value=_mock_settings("development")):
            result = sanitize_error_message(ValueError("oops"), include_type=True)
            assert result == "ValueError: oops"

    def test_staging_includes_details(self):
        with patch("app.core.errors.get_settings", return_value=_mock_settings("staging")):
            result = sanitize_error_message(RuntimeError("debug info"))
            assert result == "debug info"


# ======================== create_http_exception ========================

class TestCreateHttpException:
    def test_basic_creation(self):
        with patch("app.core.errors.get_settings", return_value=_mock_settings("development")):
            exc = create_http_exception(
                ErrorCode.INTERNAL_ERROR,
                "Something went wrong",
            )
            assert isinstance(exc, HTTPException)
            assert exc.status_code == 500
            assert exc.detail == "Something went wrong"

    def test_with_internal_error_dev(self):
        with patch("app.core.errors.get_settings", return_value=_mock_settings("development")):
            exc = create_http_exception(
                ErrorCode.GATEWAY_ERROR,
                "Gateway failed",
                internal_error=ConnectionError("timeout"),
            )
            assert exc.detail == "Gateway failed: timeout"

    def test_with_internal_error_production(self):
        with patch("app.core.errors.get_settings", return_value=_mock_settings("production")):
            exc = create_http_exception(
                ErrorCode.GATEWAY_ERROR,
                "Gateway failed",
                internal_error=ConnectionError("10.0.0.1 refused"),
            )
            assert exc.detail == "Gateway failed"

    def test_logging(self):
        with patch("app.core.errors.get_settings", return_value=_mock_settings("development")):
            with patch("app.core.errors.logger") as mock_logger:
                create_http_exception(ErrorCode.INTERNAL_ERROR, "fail")
                mock_logger.error.assert_called_once_with("[INTERNAL_ERROR] fail")

    def test_no_logging(self):
        with patch("app.core.errors.get_settings", return_value=_mock_settings("development")):
            with patch("app.core.errors.logger") as mock_logger:
                create_http_exception(ErrorCode.INTERNAL_ERROR, "fail", log_error=False)
                mock_logger.error.assert_not_called()


# ======================== Pre-built helpers ========================

class TestPrebuiltErrors:
    def test_ai_service_error(self):
        with patch("app.core.errors.get_settings", return_value=_mock_settings("production")):
            exc = ai_service_error(RuntimeError("rate limited"))
            assert exc.status_code == 503
            assert "AI service temporarily unavailable" in exc.detail
            assert "rate limited" not in exc.detail
