"""FastAPI dependencies for dependency injection"""

from typing import Annotated

from fastapi import Depends

from .config import Settings, get_settings
from ..services.chat_service import ChatService
from ..services.paystack_client import PaystackClient, get_paystack_client


def get_chat_service() -> ChatService:
    return ChatService(settings=get_settings())


SettingsDep = Annotated[Settings, Depends(get_settings)]
PaystackClientDep = Annotated[PaystackClient, Depends(get_paystack_client)]
ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]
