"""
Normalize payments gateway transaction payloads.

Accepts whatever the gateway (or a tool call) returned: the Paystack
envelope, a bare list of entries, or an ad-hoc wrapper object. Every field is
resolved through an ordered chain of extractors; missing or malformed input
degrades to absent values instead of raising.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from ..models.transaction import (
    NormalizedStatus,
    NormalizedTransaction,
    NormalizedTransactionResult,
    TransactionMeta,
)
from .transaction_metrics import infer_currency, sum_amounts

Number = Union[int, float]

# Probed in order when the payload is not a recognized envelope
ARRAY_CANDIDATE_KEYS = ("transactions", "data", "items", "records", "results")

_STATUS_BUCKETS: tuple[tuple[NormalizedStatus, frozenset[str]], ...] = (
    (NormalizedStatus.SUCCESS, frozenset({"success", "successful"})),
    (NormalizedStatus.FAILED, frozenset({"failed", "failure", "error"})),
    (
        NormalizedStatus.ABANDONED,
        frozenset({"abandoned", "cancelled", "canceled", "timeout", "timed out", "expired"}),
    ),
)

_CUSTOMER_KEYS = ("customer", "customer_data", "customerDetails")


def normalize_status(value: Optional[str]) -> NormalizedStatus:
    """Map a gateway status token onto one of the four status buckets."""
    if not isinstance(value, str) or not value.strip():
        return NormalizedStatus.OTHER

    token = value.strip().lower()
    for bucket, tokens in _STATUS_BUCKETS:
        if token in tokens:
            return bucket
    return NormalizedStatus.OTHER


# ==================== Scalar coercion ====================


def _as_string(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _as_number(value: Any) -> Optional[Number]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            finite = math.isfinite(value)
        except OverflowError:
            # int beyond float range
            return None
        return value if finite else None
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if "_" in text:
            return None
        try:
            parsed = float(text)
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def _as_id(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return _as_string(value)


def _as_mapping(value: Any) -> Optional[Mapping[str, Any]]:
    return value if isinstance(value, Mapping) else None


def _get(record: Optional[Mapping[str, Any]], key: str) -> Any:
    return record.get(key) if record is not None else None


# ==================== Extractor chains ====================


@dataclass(frozen=True)
class _EntryView:
    """One raw entry plus the nested sub-objects extractors look into."""

    entry: Mapping[str, Any]
    customer: Optional[Mapping[str, Any]]
    authorization: Optional[Mapping[str, Any]]
    metadata: Optional[Mapping[str, Any]]

    @classmethod
    def of(cls, entry: Mapping[str, Any]) -> "_EntryView":
        customer = None
        for key in _CUSTOMER_KEYS:
            customer = _as_mapping(entry.get(key))
            if customer is not None:
                break
        return cls(
            entry=entry,
            customer=customer,
            authorization=_as_mapping(entry.get("authorization")),
            metadata=_as_mapping(entry.get("metadata")),
        )


Extractor = Callable[[_EntryView], Any]


def _resolve(view: _EntryView, chain: Sequence[Extractor]) -> Any:
    """Return the first non-None result of the extractor chain."""
    for extractor in chain:
        value = extractor(view)
        if value is not None:
            return value
    return None


def _entry_string(*keys: str) -> list[Extractor]:
    return [lambda v, k=key: _as_string(v.entry.get(k)) for key in keys]


def _first_name_part(view: _EntryView) -> Optional[str]:
    return _as_string(view.entry.get("first_name")) or _as_string(_get(view.customer, "first_name"))


def _last_name_part(view: _EntryView) -> Optional[str]:
    return _as_string(view.entry.get("last_name")) or _as_string(_get(view.customer, "last_name"))


def _joined_name(view: _EntryView) -> Optional[str]:
    parts = [part for part in (_first_name_part(view), _last_name_part(view)) if part]
    return " ".join(parts).strip() or None


def extract_error_from_log(log: Any) -> Optional[str]:
    """First error message found in a gateway ``log`` structure."""
    record = _as_mapping(log)
    if record is None:
        return None

    errors = record.get("errors")
    if isinstance(errors, list):
        for error in errors:
            if isinstance(error, str) and _as_string(error):
                return _as_string(error)
        for error in errors:
            if isinstance(error, Mapping):
                message = (
                    _as_string(error.get("message"))
                    or _as_string(error.get("detail"))
                    or _as_string(error.get("description"))
                )
                if message:
                    return message

    return _as_string(record.get("message"))


STATUS_CHAIN: tuple[Extractor, ...] = tuple(_entry_string("status", "state", "current_status"))

NAME_CHAIN: tuple[Extractor, ...] = (
    _joined_name,
    lambda v: _as_string(_get(v.customer, "name")),
    *_entry_string("customer_name", "customerName", "name"),
    lambda v: _as_string(_get(v.authorization, "account_name")),
)

EMAIL_CHAIN: tuple[Extractor, ...] = (
    lambda v: _as_string(_get(v.customer, "email")),
    *_entry_string("customer_email", "email", "customerEmail"),
    lambda v: _as_string(_get(v.authorization, "email")),
    lambda v: _as_string(_get(v.metadata, "email")),
)

GATEWAY_RESPONSE_CHAIN: tuple[Extractor, ...] = tuple(
    _entry_string("gateway_response", "gatewayResponse")
)

FAILURE_REASON_CHAIN: tuple[Extractor, ...] = (
    *GATEWAY_RESPONSE_CHAIN,
    *_entry_string("failure_reason", "failureReason", "reason", "status_reason"),
    lambda v: extract_error_from_log(v.entry.get("log")),
)

ID_CHAIN: tuple[Extractor, ...] = tuple(
    [lambda v, k=key: _as_id(v.entry.get(k)) for key in ("id", "reference", "transaction_id", "transactionId")]
)

AMOUNT_CHAIN: tuple[Extractor, ...] = (
    lambda v: _as_number(v.entry.get("amount")),
    lambda v: _as_number(v.entry.get("amount_in_minor")),
)

CURRENCY_CHAIN: tuple[Extractor, ...] = tuple(_entry_string("currency"))

CREATED_AT_CHAIN: tuple[Extractor, ...] = tuple(_entry_string("createdAt", "created_at"))


# ==================== Entry / batch normalization ====================


def normalize_transaction(entry: Any) -> Optional[NormalizedTransaction]:
    """Normalize one raw entry; non-mapping entries yield ``None``."""
    if not isinstance(entry, Mapping):
        return None

    view = _EntryView.of(entry)
    raw_status = _resolve(view, STATUS_CHAIN)

    return NormalizedTransaction(
        id=_resolve(view, ID_CHAIN),
        status=normalize_status(raw_status),
        raw_status=raw_status.lower() if raw_status else None,
        customer_name=_resolve(view, NAME_CHAIN),
        customer_email=_resolve(view, EMAIL_CHAIN),
        failure_reason=_resolve(view, FAILURE_REASON_CHAIN),
        gateway_response=_resolve(view, GATEWAY_RESPONSE_CHAIN),
        amount=_resolve(view, AMOUNT_CHAIN),
        currency=_resolve(view, CURRENCY_CHAIN),
        created_at=_resolve(view, CREATED_AT_CHAIN),
    )


def is_transaction_envelope(data: Any) -> bool:
    """True for the gateway envelope shape: a mapping whose ``data`` is a list."""
    return isinstance(data, Mapping) and isinstance(data.get("data"), list)


def find_transaction_entries(data: Any) -> list[Any]:
    """Locate the list of raw entries in a non-envelope payload."""
    if isinstance(data, list):
        return data
    if isinstance(data, Mapping):
        for key in ARRAY_CANDIDATE_KEYS:
            candidate = data.get(key)
            if isinstance(candidate, list):
                return candidate
    return []


def _first_number(*values: Any) -> Optional[Number]:
    for value in values:
        number = _as_number(value)
        if number is not None:
            return number
    return None


def _first_string(*values: Any) -> Optional[str]:
    for value in values:
        text = _as_string(value)
        if text is not None:
            return text
    return None


def _normalize_entries(entries: list[Any]) -> tuple[NormalizedTransaction, ...]:
    normalized = (normalize_transaction(entry) for entry in entries)
    return tuple(txn for txn in normalized if txn is not None)


def normalize_transactions_from_output(
    data: Any,
    logger: Optional[logging.Logger] = None,
) -> NormalizedTransactionResult:
    """
    Normalize a raw gateway or tool payload into canonical transactions.

    Args:
        data: Any JSON-like value
        logger: Optional logger for shape diagnostics; nothing is logged when omitted

    Returns:
        NormalizedTransactionResult (possibly empty)
    """
    if is_transaction_envelope(data):
        entries = data["data"]
        transactions = _normalize_entries(entries)
        meta_record = _as_mapping(data.get("meta"))

        reported_total = _first_number(_get(meta_record, "total"))
        total_volume = _first_number(
            _get(meta_record, "total_volume"),
            _get(meta_record, "total_volume_in_minor"),
        )
        meta = TransactionMeta(
            total=reported_total if reported_total is not None else len(transactions),
            total_volume=total_volume or sum_amounts(transactions),
            currency=_as_string(_get(meta_record, "currency")) or infer_currency(transactions),
            message=_as_string(data.get("message")),
            page=_first_number(_get(meta_record, "page")),
            per_page=_first_number(_get(meta_record, "per_page")),
            page_count=_first_number(_get(meta_record, "page_count")),
        )
        shape = "envelope"
    else:
        entries = find_transaction_entries(data)
        transactions = _normalize_entries(entries)
        record = _as_mapping(data)
        record_meta = _as_mapping(_get(record, "meta"))

        reported_total = _first_number(_get(record_meta, "total"), _get(record, "total"))
        total_volume = _first_number(
            _get(record_meta, "total_volume"),
            _get(record, "total_volume"),
        )
        meta = TransactionMeta(
            total=reported_total if reported_total is not None else len(transactions),
            total_volume=total_volume or sum_amounts(transactions),
            currency=(
                _first_string(_get(record_meta, "currency"), _get(record, "currency"))
                or infer_currency(transactions)
            ),
            message=_as_string(_get(record, "message")),
        )
        shape = "list" if isinstance(data, list) else "wrapper"

    if logger is not None:
        dropped = len(entries) - len(transactions)
        logger.debug(
            f"Normalized {len(transactions)} transactions from {shape} payload"
            + (f" ({dropped} non-object entries dropped)" if dropped else "")
        )

    return NormalizedTransactionResult(transactions=transactions, meta=meta)
