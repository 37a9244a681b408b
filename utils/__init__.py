"""
Utilities - logging and in-memory chat storage
"""
from .logger import get_logger
from .chat_store import Chat, Message, ChatStore

__all__ = [
    "get_logger",
    "Chat",
    "Message",
    "ChatStore",
]
