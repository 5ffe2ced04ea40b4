"""Chat assistant routes"""

import logging
from typing import Any, Literal, Optional

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ...core.dependencies import ChatServiceDep
from ...core.errors import ai_service_error
from ...models.assistant_context import parse_assistant_page_context
from ...services.ai import AIClientError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["Chat"])


# ==================== Request/Response Models ====================

class ChatMessage(BaseModel):
    """One conversation message from the client"""
    role: Literal["user", "assistant"]
    content: str = Field(..., min_length=1)


class ChatRequest(BaseModel):
    """Chat request body"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    messages: list[ChatMessage] = Field(..., min_length=1)
    model: Optional[str] = None
    page_context: Optional[dict[str, Any]] = None


class ToolCallResponse(BaseModel):
    name: str
    arguments: str
    result: dict[str, Any]


class ChatUsage(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    input_tokens: int
    output_tokens: int


class ChatResponse(BaseModel):
    """Chat response body"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    model: str
    steps: int
    tool_calls: list[ToolCallResponse] = []
    usage: ChatUsage


# ==================== Routes ====================

@router.post("", response_model=ChatResponse, response_model_by_alias=True)
async def chat(request: ChatRequest, service: ChatServiceDep):
    """
    Answer the latest user message.

    The model may call the ``getTransactions`` tool; its normalized results
    are included in ``toolCalls``. An invalid page context is ignored.
    """
    page_context = parse_assistant_page_context(request.page_context)
    if request.page_context and page_context is None:
        logger.info("Ignoring invalid page context in chat request")

    try:
        result = await service.respond(
            [message.model_dump() for message in request.messages],
            model=request.model,
            page_context=page_context,
        )
    except AIClientError as e:
        raise ai_service_error(e)

    return ChatResponse(
        message=result.message,
        model=result.model,
        steps=result.steps,
        tool_calls=[
            ToolCallResponse(name=call.name, arguments=call.arguments, result=call.result)
            for call in result.tool_calls
        ],
        usage=ChatUsage(input_tokens=result.input_tokens, output_tokens=result.output_tokens),
    )
