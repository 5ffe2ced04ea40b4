"""Transactions dashboard routes"""

import logging
from datetime import UTC, datetime
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from ...core.dependencies import PaystackClientDep, SettingsDep
from ...core.errors import sanitize_error_message
from ...models.transaction import NormalizedTransactionResult
from ...services.paystack_client import GatewayError, TransactionFetchInput
from ...services.transaction_dashboard import build_transactions_context, resolve_filters

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.get("")
async def list_transactions(
    settings: SettingsDep,
    client: PaystackClientDep,
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    status_filter: Optional[str] = Query(None, alias="status"),
    page: Optional[str] = None,
):
    """
    Get a page of normalized transactions for the dashboard.

    Invalid filters fall back to defaults (last N days, all statuses, page 1).
    The response always carries the assistant page context; on gateway
    failure it is returned with an error status and empty results.
    """
    filters = resolve_filters(
        {"from": date_from, "to": date_to, "status": status_filter, "page": page},
        today=datetime.now(UTC).date(),
        range_days=settings.transactions_default_range_days,
    )
    per_page = settings.transactions_per_page

    try:
        fetched = await client.fetch_transactions(
            TransactionFetchInput(
                start_date=filters.date_from,
                end_date=filters.date_to,
                per_page=per_page,
                page=filters.page,
                status=None if filters.status == "all" else filters.status,
            )
        )
    except GatewayError as e:
        logger.error(f"[{e.code.value}] Transactions fetch failed: {e}")

        message = sanitize_error_message(e, user_message="Unable to fetch transactions")
        empty = NormalizedTransactionResult()
        context = build_transactions_context(
            empty, filters, error=message, locale=settings.display_locale
        )
        return JSONResponse(
            status_code=e.status_code,
            content={
                "transactions": [],
                "meta": {},
                "filters": filters.to_payload(),
                "perPage": per_page,
                "error": message,
                "errorCode": e.code.value,
                "assistantContext": context.model_dump(mode="json", by_alias=True, exclude_none=True),
            },
        )

    normalized = fetched.normalized
    context = build_transactions_context(normalized, filters, locale=settings.display_locale)
    payload = normalized.to_payload()
    return {
        "transactions": payload["transactions"],
        "meta": payload["meta"],
        "filters": filters.to_payload(),
        "perPage": per_page,
        "error": None,
        "assistantContext": context.model_dump(mode="json", by_alias=True, exclude_none=True),
    }
