"""
Paystack transactions client.

Fetches transaction listings from the Paystack studio API and returns both
the validated raw payload and its normalized form.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from fastapi import status
from pydantic import ValidationError

from ..core.config import Settings, get_settings
from ..core.errors import AppError, ErrorCode
from ..models.transaction import NormalizedTransactionResult, PaystackTransactionResponse
from .transaction_normalizer import normalize_transactions_from_output

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Unable to fetch transactions"


class GatewayError(AppError):
    """
    Payments gateway request failed.

    ``upstream_status`` is the HTTP status Paystack answered with, if any;
    ``status_code`` is what our API answers with.
    """

    code = ErrorCode.GATEWAY_ERROR
    http_status = status.HTTP_502_BAD_GATEWAY

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        self.upstream_status = upstream_status
        super().__init__(
            code=self.code,
            message=message,
            status_code=self.http_status,
            details={"upstreamStatus": upstream_status} if upstream_status else None,
        )


class GatewayNotConfiguredError(GatewayError):
    """No gateway token configured"""

    code = ErrorCode.GATEWAY_NOT_CONFIGURED
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE


class GatewayResponseError(GatewayError):
    """Gateway answered with a payload that does not match the envelope"""

    code = ErrorCode.GATEWAY_INVALID_RESPONSE


@dataclass
class TransactionFetchInput:
    start_date: str
    end_date: str
    per_page: Optional[int] = None
    page: Optional[int] = None
    status: Optional[str] = None


@dataclass
class FetchTransactionsResult:
    raw: PaystackTransactionResponse
    normalized: NormalizedTransactionResult


class PaystackClient:
    """
    Async client for the Paystack transaction listing endpoint.

    Usage:
        client = PaystackClient(get_settings())
        result = await client.fetch_transactions(
            TransactionFetchInput(start_date="2024-01-01", end_date="2024-01-31")
        )
    """

    def __init__(
        self,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings
        self._http_client = http_client

    async def aclose(self) -> None:
        """Close the pooled HTTP client, if one was supplied."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def _headers(self) -> dict[str, str]:
        token = self.settings.paystack_jwt.strip()
        if not token:
            raise GatewayNotConfiguredError("PAYSTACK_JWT is not configured")
        return {
            "Authorization": f"Bearer {token}",
            "jwt-auth": "true",
            "Accept": "application/json",
        }

    @staticmethod
    def build_params(fetch_input: TransactionFetchInput) -> dict[str, str]:
        params = {"from": fetch_input.start_date, "to": fetch_input.end_date}
        if fetch_input.per_page:
            params["perPage"] = str(fetch_input.per_page)
        if fetch_input.page:
            params["page"] = str(fetch_input.page)
        if fetch_input.status:
            params["status"] = fetch_input.status
        return params

    async def _get(self, params: dict[str, str]) -> Any:
        headers = self._headers()
        # Keep the query already on the endpoint (reduced_fields=true)
        url = httpx.URL(self.settings.paystack_endpoint).copy_merge_params(params)

        try:
            if self._http_client is not None:
                response = await self._http_client.get(url, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.settings.paystack_timeout) as client:
                    response = await client.get(url, headers=headers)
        except httpx.HTTPError as e:
            logger.warning(f"Paystack request failed: {e}")
            raise GatewayError(f"{DEFAULT_ERROR_MESSAGE}: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if not response.is_success:
            message = None
            if isinstance(payload, dict) and payload.get("message"):
                message = str(payload["message"])
            logger.warning(
                f"Paystack returned HTTP {response.status_code}: {message or 'no message'}"
            )
            raise GatewayError(message or DEFAULT_ERROR_MESSAGE, upstream_status=response.status_code)

        return payload

    async def fetch_raw(self, start_date: str, end_date: str) -> Any:
        """Fetch the unvalidated gateway payload for a date range."""
        return await self._get(
            self.build_params(TransactionFetchInput(start_date=start_date, end_date=end_date))
        )

    async def fetch_transactions(
        self, fetch_input: TransactionFetchInput
    ) -> FetchTransactionsResult:
        """
        Fetch, validate and normalize a page of transactions.

        Raises:
            GatewayNotConfiguredError: No token configured
            GatewayError: Transport failure or non-2xx response
            GatewayResponseError: Response body is not a transaction envelope
        """
        payload = await self._get(self.build_params(fetch_input))

        try:
            parsed = PaystackTransactionResponse.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Unexpected Paystack response shape: {e.error_count()} error(s)")
            raise GatewayResponseError(f"{DEFAULT_ERROR_MESSAGE}: unexpected response shape") from e

        normalized = normalize_transactions_from_output(parsed.to_raw(), logger=logger)
        logger.info(
            f"Fetched {len(normalized.transactions)} transactions "
            f"({fetch_input.start_date} to {fetch_input.end_date}, page {fetch_input.page or 1})"
        )
        return FetchTransactionsResult(raw=parsed, normalized=normalized)


_paystack_client: Optional[PaystackClient] = None


def get_paystack_client() -> PaystackClient:
    """Get the shared Paystack client (one pooled HTTP connection per process)."""
    global _paystack_client
    if _paystack_client is None:
        settings = get_settings()
        _paystack_client = PaystackClient(
            settings,
            http_client=httpx.AsyncClient(timeout=settings.paystack_timeout),
        )
    return _paystack_client


async def close_paystack_client() -> None:
    """Release the shared client; the next call to get_paystack_client rebuilds it."""
    global _paystack_client
    if _paystack_client is not None:
        await _paystack_client.aclose()
        _paystack_client = None
