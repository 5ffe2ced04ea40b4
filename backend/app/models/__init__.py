"""Data models for transactions and assistant page context"""

from .assistant_context import (
    AssistantPageContext,
    AssistantTable,
    AssistantTableRow,
    parse_assistant_page_context,
    summarize_assistant_page_context,
)
from .transaction import (
    NormalizedStatus,
    NormalizedTransaction,
    NormalizedTransactionResult,
    PaystackTransactionResponse,
    TransactionFilters,
    TransactionMeta,
)

__all__ = [
    "AssistantPageContext",
    "AssistantTable",
    "AssistantTableRow",
    "NormalizedStatus",
    "NormalizedTransaction",
    "NormalizedTransactionResult",
    "PaystackTransactionResponse",
    "TransactionFilters",
    "TransactionMeta",
    "parse_assistant_page_context",
    "summarize_assistant_page_context",
]
