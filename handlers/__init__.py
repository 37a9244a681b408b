"""
Handlers module - chat operations exposed to the web layer
"""
from .types import (
    ChatHandlerError,
    ChatNotFoundError,
    ChatAccessDeniedError,
    InvalidMessageError,
    to_error_response,
)
from .chat_handlers import (
    handle_list_chats,
    handle_create_chat,
    handle_get_chat,
    handle_delete_chat,
    handle_get_messages,
    handle_send_message,
)

__all__ = [
    "ChatHandlerError",
    "ChatNotFoundError",
    "ChatAccessDeniedError",
    "InvalidMessageError",
    "to_error_response",
    "handle_list_chats",
    "handle_create_chat",
    "handle_get_chat",
    "handle_delete_chat",
    "handle_get_messages",
    "handle_send_message",
]
