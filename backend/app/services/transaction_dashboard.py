"""
Transactions dashboard service.

Resolves dashboard filters, loads a page of transactions from the gateway and
builds the assistant page context describing what the user is looking at.
"""

import logging
from datetime import UTC, date, datetime, timedelta
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from ..models.assistant_context import (
    AssistantPageContext,
    AssistantTable,
    AssistantTableRow,
)
from ..models.transaction import (
    NormalizedTransactionResult,
    TransactionFilters,
)
from .transaction_metrics import format_currency_amount
from .transaction_summary import build_transaction_stats

logger = logging.getLogger(__name__)

CONTEXT_ROW_LIMIT = 25

TABLE_COLUMNS = [
    "ID",
    "Customer",
    "Email",
    "Amount",
    "Status",
    "Created",
    "Gateway Response",
]


def default_date_range(today: date, range_days: int) -> tuple[str, str]:
    """Inclusive range of ``range_days`` days ending ``today``."""
    start = today - timedelta(days=max(range_days, 1) - 1)
    return start.isoformat(), today.isoformat()


def resolve_filters(
    query: Mapping[str, Any],
    today: date,
    range_days: int = 30,
) -> TransactionFilters:
    """
    Resolve dashboard filters from query parameters.

    Missing fields take defaults. If any supplied field is invalid, every
    field falls back to its default. ``from`` and ``to`` are swapped when out
    of order.
    """
    default_from, default_to = default_date_range(today, range_days)
    supplied = {key: value for key, value in query.items() if value not in (None, "")}

    try:
        parsed = TransactionFilters.model_validate(
            {"from": default_from, "to": default_to, **supplied}
        )
    except ValidationError as e:
        logger.info(f"Ignoring invalid transaction filters: {e.error_count()} error(s)")
        parsed = TransactionFilters(date_from=default_from, date_to=default_to)

    return ensure_chronological_order(parsed)


def ensure_chronological_order(filters: TransactionFilters) -> TransactionFilters:
    """Swap ``from``/``to`` when the range is reversed."""
    try:
        start = date.fromisoformat(filters.date_from)
        end = date.fromisoformat(filters.date_to)
    except ValueError:
        return filters

    if start > end:
        return filters.model_copy(
            update={"date_from": end.isoformat(), "date_to": start.isoformat()}
        )
    return filters


def _format_row_amount(
    amount: Optional[float],
    currency: Optional[str],
    locale: str,
) -> str:
    if amount is None:
        return "—"
    return format_currency_amount(amount / 100, currency, locale=locale)


def build_transactions_context(
    result: NormalizedTransactionResult,
    filters: TransactionFilters,
    error: Optional[str] = None,
    locale: str = "en_US",
) -> AssistantPageContext:
    """Assistant page context for the transactions dashboard."""
    transactions = result.transactions
    meta = result.meta

    if error:
        summary = f"Latest fetch failed: {error}"
    else:
        total = meta.total if meta.total is not None else len(transactions)
        summary = (
            f"Showing {len(transactions)} of {total} transactions from "
            f"{filters.date_from} to {filters.date_to} (status: {filters.status})."
        )

    rows = [
        AssistantTableRow(
            id=txn.id,
            values={
                "id": txn.id or "n/a",
                "customer": txn.customer_name or "Unknown",
                "email": txn.customer_email or "Unknown",
                "amount": _format_row_amount(txn.amount, txn.currency or meta.currency, locale),
                "status": txn.status.value,
                "createdAt": txn.created_at or "",
                "gatewayResponse": txn.gateway_response or "",
            },
        )
        for txn in transactions[:CONTEXT_ROW_LIMIT]
    ]

    return AssistantPageContext(
        page_id="transactions-dashboard",
        title="Transactions Dashboard",
        description="Detailed Paystack transaction table",
        path="/transactions",
        timestamp=datetime.now(UTC).isoformat(),
        summary=summary,
        filters={
            "from": filters.date_from,
            "to": filters.date_to,
            "status": filters.status,
            "page": str(filters.page),
        },
        stats=build_transaction_stats(result),
        table=AssistantTable(
            columns=list(TABLE_COLUMNS),
            visible_count=len(transactions),
            rows=rows,
        ),
        highlights=[error] if error else None,
    )
