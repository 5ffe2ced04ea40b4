"""
Tests for transaction summary statistics.
"""

import pytest

from app.models.transaction import (
    NormalizedStatus,
    NormalizedTransaction,
    NormalizedTransactionResult,
    TransactionMeta,
)
from app.services.transaction_summary import (
    build_transaction_stats,
    count_statuses,
    summarize_customers,
    summarize_failure_reasons,
)


def _txn(**kwargs) -> NormalizedTransaction:
    return NormalizedTransaction(**kwargs)


@pytest.mark.unit
class TestCountStatuses:
    def test_all_buckets_present(self):
        counts = count_statuses([])
        assert counts == {"success": 0, "failed": 0, "abandoned": 0, "other": 0}

    def test_counts(self):
        transactions = [
            _txn(status=NormalizedStatus.SUCCESS),
            _txn(status=NormalizedStatus.SUCCESS),
            _txn(status=NormalizedStatus.FAILED),
            _txn(),
        ]
        counts = count_statuses(transactions)
        assert counts["success"] == 2
        assert counts["failed"] == 1
        assert counts["abandoned"] == 0
        assert counts["other"] == 1


@pytest.mark.unit
class TestSummarizeCustomers:
    def test_groups_by_email_case_insensitively(self):
        transactions = [
            _txn(customer_email="Ada@Example.com"),
            _txn(customer_email="ada@example.com", customer_name="Ada Obi"),
            _txn(customer_email="tunde@example.com"),
        ]

        summary = summarize_customers(transactions)

        assert summary.total_unique == 2
        top = summary.top[0]
        assert top.key == "ada@example.com"
        assert top.count == 2
        assert top.name == "Ada Obi"
        assert top.email == "Ada@Example.com"

    def test_key_fallbacks(self):
        transactions = [
            _txn(customer_name="Kemi"),
            _txn(id="txn-1"),
            _txn(),
        ]

        summary = summarize_customers(transactions)

        assert [stat.key for stat in summary.top] == ["kemi", "txn-1", "2"]

    def test_limit_and_tie_order(self):
        transactions = [
            _txn(customer_email="a@x.com"),
            _txn(customer_email="b@x.com"),
            _txn(customer_email="c@x.com"),
            _txn(customer_email="c@x.com"),
        ]

        summary = summarize_customers(transactions, limit=2)

        assert [stat.key for stat in summary.top] == ["c@x.com", "a@x.com"]
        assert summary.total_unique == 3


@pytest.mark.unit
class TestSummarizeFailureReasons:
    def test_ignores_successful_transactions(self):
        transactions = [
            _txn(status=NormalizedStatus.SUCCESS, failure_reason="Approved"),
            _txn(status=NormalizedStatus.FAILED, failure_reason="card declined"),
        ]

        reasons = summarize_failure_reasons(transactions)

        assert len(reasons) == 1
        assert reasons[0].reason == "Card declined"
        assert reasons[0].count == 1
        assert reasons[0].percentage == 100

    def test_percentages_and_ordering(self):
        transactions = [
            _txn(status=NormalizedStatus.FAILED, failure_reason="Insufficient funds"),
            _txn(status=NormalizedStatus.FAILED, failure_reason="card declined"),
            _txn(status=NormalizedStatus.ABANDONED, failure_reason="Card Declined"),
        ]

        reasons = summarize_failure_reasons(transactions)

        assert [(r.reason, r.count, r.percentage) for r in reasons] == [
            ("Card declined", 2, 67),
            ("Insufficient funds", 1, 33),
        ]

    def test_minimum_percentage_is_one(self):
        transactions = [_txn(status=NormalizedStatus.FAILED, failure_reason="rare")]
        transactions += [_txn(status=NormalizedStatus.FAILED) for _ in range(299)]

        reasons = summarize_failure_reasons(transactions)

        assert reasons[0].percentage == 1

    def test_no_reasons(self):
        assert summarize_failure_reasons([]) == []
        assert summarize_failure_reasons([_txn(status=NormalizedStatus.FAILED)]) == []

    def test_limit(self):
        transactions = [
            _txn(status=NormalizedStatus.FAILED, failure_reason=f"reason {i}") for i in range(6)
        ]
        assert len(summarize_failure_reasons(transactions)) == 4


@pytest.mark.unit
class TestBuildTransactionStats:
    def test_stats(self):
        result = NormalizedTransactionResult(
            transactions=(
                _txn(status=NormalizedStatus.SUCCESS, amount=500),
                _txn(status=NormalizedStatus.FAILED, amount=300),
                _txn(status=NormalizedStatus.ABANDONED),
            ),
            meta=TransactionMeta(total=40, total_volume=80000),
        )

        assert build_transaction_stats(result) == {
            "visibleRows": 3,
            "totalTransactions": 40,
            "totalVolumeMinor": 80000,
            "successCount": 1,
            "failedCount": 1,
            "abandonedCount": 1,
        }

    def test_missing_meta_values(self):
        result = NormalizedTransactionResult(transactions=(_txn(),))

        stats = build_transaction_stats(result)

        assert stats["totalTransactions"] == 1
        assert stats["totalVolumeMinor"] == 0
