"""
``getTransactions`` tool exposed to the chat model.

Fetches the raw gateway payload for a date range and hands the model the
normalized result, so tool output has the same canonical shape the dashboard
renders.
"""

import json
import logging
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from .paystack_client import GatewayError, PaystackClient, get_paystack_client
from .transaction_normalizer import normalize_transactions_from_output

logger = logging.getLogger(__name__)

TOOL_NAME = "getTransactions"

GET_TRANSACTIONS_TOOL: dict[str, Any] = {
    "type": "function",
    "function": {
        "name": TOOL_NAME,
        "description": "Get the transactions for a specific time period",
        "parameters": {
            "type": "object",
            "properties": {
                "startDate": {
                    "type": "string",
                    "description": "The start date of the time period (YYYY-MM-DD)",
                },
                "endDate": {
                    "type": "string",
                    "description": "The end date of the time period (YYYY-MM-DD)",
                },
            },
            "required": ["startDate", "endDate"],
            "additionalProperties": False,
        },
    },
}


class GetTransactionsArgs(BaseModel):
    start_date: str = Field(..., alias="startDate", min_length=1)
    end_date: str = Field(..., alias="endDate", min_length=1)


class TransactionTool:
    """Executes ``getTransactions`` calls issued by the chat model."""

    name = TOOL_NAME
    definition = GET_TRANSACTIONS_TOOL

    def __init__(self, client: Optional[PaystackClient] = None):
        self._client = client

    @property
    def client(self) -> PaystackClient:
        return self._client or get_paystack_client()

    @staticmethod
    def parse_arguments(arguments: Any) -> GetTransactionsArgs:
        """Accept a JSON string (as sent by the model) or a dict."""
        if isinstance(arguments, str):
            arguments = json.loads(arguments or "{}")
        return GetTransactionsArgs.model_validate(arguments)

    async def execute(self, arguments: Any) -> dict[str, Any]:
        """
        Run the tool.

        Errors are returned as ``{"error": ...}`` so the model can explain
        them to the user instead of the whole chat turn failing.
        """
        try:
            args = self.parse_arguments(arguments)
        except (ValueError, ValidationError) as e:
            logger.info(f"Rejected {TOOL_NAME} arguments: {e}")
            return {"error": "Invalid arguments: startDate and endDate are required"}

        try:
            payload = await self.client.fetch_raw(args.start_date, args.end_date)
        except GatewayError as e:
            logger.warning(f"{TOOL_NAME} failed: {e.message}")
            return {"error": e.message}

        result = normalize_transactions_from_output(payload, logger=logger)
        return result.to_payload()
