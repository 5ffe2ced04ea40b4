"""
Tests for dashboard filter resolution and the transactions page context.
"""

from datetime import date

import pytest

from app.models.transaction import (
    NormalizedStatus,
    NormalizedTransaction,
    NormalizedTransactionResult,
    TransactionFilters,
    TransactionMeta,
)
from app.services.transaction_dashboard import (
    CONTEXT_ROW_LIMIT,
    TABLE_COLUMNS,
    build_transactions_context,
    default_date_range,
    ensure_chronological_order,
    resolve_filters,
)

TODAY = date(2024, 8, 31)


@pytest.mark.unit
class TestResolveFilters:
    def test_defaults(self):
        filters = resolve_filters({}, TODAY)

        assert filters.date_from == "2024-08-02"
        assert filters.date_to == "2024-08-31"
        assert filters.status == "all"
        assert filters.page == 1

    def test_supplied_values(self):
        filters = resolve_filters(
            {"from": "2024-07-01", "to": "2024-07-15", "status": "failed", "page": "3"},
            TODAY,
        )

        assert filters.to_payload() == {
            "from": "2024-07-01",
            "to": "2024-07-15",
            "status": "failed",
            "page": 3,
        }

    def test_blank_values_take_defaults(self):
        filters = resolve_filters({"from": "", "to": None, "status": "success"}, TODAY)

        assert filters.date_from == "2024-08-02"
        assert filters.date_to == "2024-08-31"
        assert filters.status == "success"

    @pytest.mark.parametrize(
        "query",
        [
            {"status": "pending"},
            {"page": "0"},
            {"page": "abc"},
            {"from": "31/08/2024"},
        ],
    )
    def test_any_invalid_field_resets_all(self, query):
        filters = resolve_filters({"status": "failed", **query}, TODAY)

        assert filters.status == "all"
        assert filters.page == 1
        assert filters.date_from == "2024-08-02"

    def test_reversed_range_is_swapped(self):
        filters = resolve_filters({"from": "2024-08-20", "to": "2024-08-01"}, TODAY)

        assert filters.date_from == "2024-08-01"
        assert filters.date_to == "2024-08-20"

    def test_custom_range_days(self):
        filters = resolve_filters({}, TODAY, range_days=7)
        assert filters.date_from == "2024-08-25"


@pytest.mark.unit
class TestDateHelpers:
    def test_default_date_range(self):
        assert default_date_range(TODAY, 1) == ("2024-08-31", "2024-08-31")
        assert default_date_range(TODAY, 0) == ("2024-08-31", "2024-08-31")

    def test_ensure_chronological_order_ignores_impossible_dates(self):
        filters = TransactionFilters(date_from="2024-02-30", date_to="2024-01-01")
        assert ensure_chronological_order(filters) is filters


def _result(count: int = 2, **meta) -> NormalizedTransactionResult:
    transactions = tuple(
        NormalizedTransaction(
            id=str(i),
            status=NormalizedStatus.SUCCESS if i % 2 == 0 else NormalizedStatus.FAILED,
            customer_name=f"Customer {i}",
            customer_email=f"c{i}@example.com",
            amount=150050,
            currency="USD",
            created_at="2024-08-22T09:15:02Z",
            gateway_response="Approved",
        )
        for i in range(count)
    )
    return NormalizedTransactionResult(
        transactions=transactions,
        meta=TransactionMeta(**meta),
    )


@pytest.mark.unit
class TestBuildTransactionsContext:
    def setup_method(self):
        self.filters = TransactionFilters(date_from="2024-08-01", date_to="2024-08-31")

    def test_identity_and_filters(self):
        context = build_transactions_context(_result(total=10), self.filters)

        assert context.page_id == "transactions-dashboard"
        assert context.title == "Transactions Dashboard"
        assert context.path == "/transactions"
        assert context.timestamp
        assert context.filters == {
            "from": "2024-08-01",
            "to": "2024-08-31",
            "status": "all",
            "page": "1",
        }
        assert context.summary == (
            "Showing 2 of 10 transactions from 2024-08-01 to 2024-08-31 (status: all)."
        )
        assert context.highlights is None

    def test_rows(self):
        context = build_transactions_context(_result(), self.filters)

        assert context.table.columns == TABLE_COLUMNS
        assert context.table.visible_count == 2
        first = context.table.rows[0]
        assert first.id == "0"
        assert first.values == {
            "id": "0",
            "customer": "Customer 0",
            "email": "c0@example.com",
            "amount": "$1,500.50",
            "status": "success",
            "createdAt": "2024-08-22T09:15:02Z",
            "gatewayResponse": "Approved",
        }

    def test_row_placeholders(self):
        result = NormalizedTransactionResult(transactions=(NormalizedTransaction(),))

        row = build_transactions_context(result, self.filters).table.rows[0]

        assert row.id is None
        assert row.values["id"] == "n/a"
        assert row.values["customer"] == "Unknown"
        assert row.values["email"] == "Unknown"
        assert row.values["amount"] == "—"
        assert row.values["status"] == "other"

    def test_rows_use_batch_currency(self):
        result = NormalizedTransactionResult(
            transactions=(NormalizedTransaction(amount=1000),),
            meta=TransactionMeta(currency="USD"),
        )

        row = build_transactions_context(result, self.filters).table.rows[0]

        assert row.values["amount"] == "$10.00"

    def test_rows_are_capped(self):
        context = build_transactions_context(_result(count=40), self.filters)

        assert len(context.table.rows) == CONTEXT_ROW_LIMIT
        assert context.table.visible_count == 40

    def test_stats(self):
        context = build_transactions_context(_result(total=2, total_volume=300100), self.filters)

        assert context.stats["visibleRows"] == 2
        assert context.stats["totalVolumeMinor"] == 300100
        assert context.stats["successCount"] == 1
        assert context.stats["failedCount"] == 1

    def test_error_context(self):
        context = build_transactions_context(
            NormalizedTransactionResult(), self.filters, error="Gateway timeout"
        )

        assert context.summary == "Latest fetch failed: Gateway timeout"
        assert context.highlights == ["Gateway timeout"]
        assert context.table.rows == []
