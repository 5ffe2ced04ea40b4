"""Services module - Business logic and external integrations"""

from .chat_service import ChatResult, ChatService
from .paystack_client import (
    FetchTransactionsResult,
    GatewayError,
    GatewayNotConfiguredError,
    GatewayResponseError,
    PaystackClient,
    TransactionFetchInput,
    close_paystack_client,
    get_paystack_client,
)
from .transaction_metrics import format_currency_amount, infer_currency, sum_amounts
from .transaction_normalizer import normalize_status, normalize_transactions_from_output
from .transaction_tool import GET_TRANSACTIONS_TOOL, TransactionTool

__all__ = [
    "ChatResult",
    "ChatService",
    "FetchTransactionsResult",
    "GET_TRANSACTIONS_TOOL",
    "GatewayError",
    "GatewayNotConfiguredError",
    "GatewayResponseError",
    "PaystackClient",
    "TransactionFetchInput",
    "TransactionTool",
    "close_paystack_client",
    "format_currency_amount",
    "get_paystack_client",
    "infer_currency",
    "normalize_status",
    "normalize_transactions_from_output",
    "sum_amounts",
]
