"""
Chat service.

Runs the assistant conversation: builds the system prompt (optionally with
the current page context), calls the model, executes requested tool calls and
feeds their results back until the model answers or the step budget is used.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..core.config import Settings, get_settings
from ..models.assistant_context import (
    AssistantPageContext,
    summarize_assistant_page_context,
)
from .ai import AIResponse, BaseAIClient, create_chat_client
from .transaction_tool import TransactionTool

logger = logging.getLogger(__name__)


@dataclass
class ToolCallRecord:
    name: str
    arguments: str
    result: dict[str, Any]


@dataclass
class ChatResult:
    message: str
    model: str
    steps: int
    tool_calls: list[ToolCallRecord] = field(default_factory=list)
    input_tokens: int = 0
    output_tokens: int = 0


class ChatService:
    """
    Tool-calling chat loop.

    Usage:
        service = ChatService()
        result = await service.respond(
            [{"role": "user", "content": "How did sales go last week?"}]
        )
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client_factory: Optional[Callable[[Optional[str]], BaseAIClient]] = None,
        transaction_tool: Optional[TransactionTool] = None,
    ):
        self.settings = settings or get_settings()
        self._client_factory = client_factory or (
            lambda model: create_chat_client(model, self.settings)
        )
        self.transaction_tool = transaction_tool or TransactionTool()
        self._tools = {self.transaction_tool.name: self.transaction_tool}

    def build_system_prompt(self, page_context: Optional[AssistantPageContext] = None) -> str:
        prompt = self.settings.chat_system_prompt
        summary = summarize_assistant_page_context(page_context)
        if summary:
            prompt = f"{prompt}\n\nThe user is currently viewing this page:\n{summary}"
        return prompt

    async def _run_tool(self, name: str, arguments: str) -> dict[str, Any]:
        tool = self._tools.get(name)
        if tool is None:
            logger.warning(f"Model requested unknown tool: {name}")
            return {"error": f"Unknown tool: {name}"}
        return await tool.execute(arguments)

    async def respond(
        self,
        messages: list[dict[str, Any]],
        model: Optional[str] = None,
        page_context: Optional[AssistantPageContext] = None,
    ) -> ChatResult:
        """
        Produce the assistant's reply to a conversation.

        Args:
            messages: Conversation so far (role/content dicts, oldest first)
            model: Model identifier (default from settings)
            page_context: Snapshot of the page the user is looking at

        Raises:
            AIClientError: On model provider failures
        """
        client = self._client_factory(model)
        conversation: list[dict[str, Any]] = [
            {"role": "system", "content": self.build_system_prompt(page_context)},
            *messages,
        ]
        tools = [tool.definition for tool in self._tools.values()]

        result = ChatResult(message="", model=client.config.model, steps=0)
        response: Optional[AIResponse] = None

        for step in range(max(self.settings.chat_max_steps, 1)):
            response = await client.chat(conversation, tools=tools)
            result.steps = step + 1
            result.model = response.model
            result.input_tokens += response.input_tokens
            result.output_tokens += response.output_tokens

            if not response.tool_calls:
                break

            conversation.append(
                {
                    "role": "assistant",
                    "content": response.content or None,
                    "tool_calls": [
                        {
                            "id": call.id,
                            "type": "function",
                            "function": {"name": call.name, "arguments": call.arguments},
                        }
                        for call in response.tool_calls
                    ],
                }
            )
            for call in response.tool_calls:
                tool_result = await self._run_tool(call.name, call.arguments)
                result.tool_calls.append(
                    ToolCallRecord(name=call.name, arguments=call.arguments, result=tool_result)
                )
                conversation.append(
                    {
                        "role": "tool",
                        "tool_call_id": call.id,
                        "content": json.dumps(tool_result, ensure_ascii=False),
                    }
                )
        else:
            logger.info(f"Chat stopped after {result.steps} steps without a final answer")

        result.message = response.content if response else ""
        logger.info(
            f"Chat reply via {result.model}: {result.steps} step(s), "
            f"{len(result.tool_calls)} tool call(s), "
            f"{result.input_tokens + result.output_tokens} tokens"
        )
        return result
