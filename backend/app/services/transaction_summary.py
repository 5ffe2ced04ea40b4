"""
Summary statistics for a page of normalized transactions.

Feeds the dashboard summary card and the assistant page context.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from ..models.transaction import (
    NormalizedStatus,
    NormalizedTransaction,
    NormalizedTransactionResult,
)


@dataclass
class CustomerStat:
    key: str
    name: Optional[str] = None
    email: Optional[str] = None
    count: int = 0


@dataclass
class CustomerSummary:
    top: list[CustomerStat] = field(default_factory=list)
    total_unique: int = 0


@dataclass
class FailureReasonStat:
    reason: str
    count: int
    percentage: int


def count_statuses(transactions: Iterable[NormalizedTransaction]) -> dict[str, int]:
    """Count transactions per status bucket (all buckets present)."""
    counts = {status.value: 0 for status in NormalizedStatus}
    for txn in transactions:
        counts[txn.status.value] += 1
    return counts


def summarize_customers(
    transactions: Sequence[NormalizedTransaction],
    limit: int = 5,
) -> CustomerSummary:
    """
    Group transactions by customer.

    Customers are keyed by email, then name, then transaction id, then
    position; keys are case-insensitive. Returns the ``limit`` most frequent
    customers (ties keep first-seen order) and the unique customer count.
    """
    stats: dict[str, CustomerStat] = {}

    for index, txn in enumerate(transactions):
        key = (txn.customer_email or txn.customer_name or txn.id or str(index)).lower()
        existing = stats.get(key)
        if existing:
            existing.count += 1
            existing.name = existing.name or txn.customer_name
            existing.email = existing.email or txn.customer_email
        else:
            stats[key] = CustomerStat(
                key=key,
                name=txn.customer_name,
                email=txn.customer_email,
                count=1,
            )

    top = sorted(stats.values(), key=lambda stat: stat.count, reverse=True)[:limit]
    return CustomerSummary(top=top, total_unique=len(stats))


def summarize_failure_reasons(
    transactions: Sequence[NormalizedTransaction],
    limit: int = 4,
) -> list[FailureReasonStat]:
    """Most common failure reasons among non-successful transactions."""
    non_success = [txn for txn in transactions if txn.status != NormalizedStatus.SUCCESS]
    reasons: dict[str, int] = {}

    for txn in non_success:
        reason = (txn.failure_reason or "").strip()
        if not reason:
            continue
        key = reason.lower()
        reasons[key] = reasons.get(key, 0) + 1

    if not reasons:
        return []

    summary = [
        FailureReasonStat(
            reason=key[:1].upper() + key[1:],
            count=count,
            # half-up rounding
            percentage=max(1, int(count / len(non_success) * 100 + 0.5)),
        )
        for key, count in reasons.items()
    ]
    summary.sort(key=lambda stat: stat.count, reverse=True)
    return summary[:limit]


def build_transaction_stats(result: NormalizedTransactionResult) -> dict[str, int]:
    """Headline numbers for a page of transactions."""
    transactions = result.transactions
    counts = count_statuses(transactions)
    total = result.meta.total if result.meta.total is not None else len(transactions)
    return {
        "visibleRows": len(transactions),
        "totalTransactions": int(total),
        "totalVolumeMinor": int(result.meta.total_volume or 0),
        "successCount": counts[NormalizedStatus.SUCCESS.value],
        "failedCount": counts[NormalizedStatus.FAILED.value],
        "abandonedCount": counts[NormalizedStatus.ABANDONED.value],
    }
