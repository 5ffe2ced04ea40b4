"""
Transaction models.

Canonical (normalized) transaction shapes shared by the dashboard API and the
chat tool, plus the permissive Paystack response schemas used to validate
gateway payloads before normalization.
"""

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


Number = Union[int, float]


class NormalizedStatus(str, Enum):
    """Status buckets every gateway status token is mapped into"""
    SUCCESS = "success"
    FAILED = "failed"
    ABANDONED = "abandoned"
    OTHER = "other"


class _CanonicalModel(BaseModel):
    """Immutable model serialized with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class NormalizedTransaction(_CanonicalModel):
    """
    One canonical transaction.

    Amounts are in minor currency units (e.g. kobo, cents).
    """
    id: Optional[str] = None
    status: NormalizedStatus = NormalizedStatus.OTHER
    raw_status: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    failure_reason: Optional[str] = None
    gateway_response: Optional[str] = None
    amount: Optional[Number] = None
    currency: Optional[str] = None
    created_at: Optional[str] = None


class TransactionMeta(_CanonicalModel):
    """Aggregate information over a batch of transactions"""
    total: Optional[Number] = None
    total_volume: Optional[Number] = None
    currency: Optional[str] = None
    message: Optional[str] = None
    page: Optional[Number] = None
    per_page: Optional[Number] = None
    page_count: Optional[Number] = None


class NormalizedTransactionResult(_CanonicalModel):
    """Normalized transactions in source order plus batch metadata"""
    transactions: tuple[NormalizedTransaction, ...] = ()
    meta: TransactionMeta = Field(default_factory=TransactionMeta)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys and absent fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ==================== Paystack response schemas ====================
# Only the minimal shape is asserted; unknown keys are kept as extras.


class PaystackCustomer(BaseModel):
    model_config = ConfigDict(extra="allow")

    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None


class PaystackTransactionEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[Union[int, str]] = None
    reference: Optional[str] = None
    amount: Optional[Number] = None
    status: Optional[str] = None
    currency: Optional[str] = None
    gateway_response: Optional[str] = None
    customer: Optional[PaystackCustomer] = None


class PaystackMeta(BaseModel):
    model_config = ConfigDict(extra="allow")

    total: Optional[Number] = None
    total_volume: Optional[Number] = None
    total_volume_in_minor: Optional[Number] = None
    currency: Optional[str] = None
    per_page: Optional[Number] = None
    page: Optional[Number] = None
    page_count: Optional[Number] = None


class PaystackTransactionResponse(BaseModel):
    """Envelope returned by the Paystack transaction listing endpoint"""
    model_config = ConfigDict(extra="allow")

    status: Optional[bool] = None
    message: Optional[str] = None
    data: list[PaystackTransactionEntry]
    meta: Optional[PaystackMeta] = None

    def to_raw(self) -> dict[str, Any]:
        """Dump back to the gateway's own key layout, extras included."""
        return self.model_dump(exclude_unset=True)


# ==================== Dashboard filters ====================

StatusFilter = Literal["all", "success", "failed", "abandoned", "other"]


class TransactionFilters(BaseModel):
    """Resolved filters of the transactions dashboard (dates as YYYY-MM-DD)"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date_from: str = Field(..., alias="from", pattern=r"^\d{4}-\d{2}-\d{2}$")
    date_to: str = Field(..., alias="to", pattern=r"^\d{4}-\d{2}-\d{2}$")
    status: StatusFilter = "all"
    page: int = Field(1, ge=1)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
