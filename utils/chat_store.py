"""
In-memory chat storage
Chats and their messages live in process memory only; a restart clears them.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional

from orchestration.types import ConversationTurn, ProjectPlan, Role
from utils.logger import get_logger

logger = get_logger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(ts: datetime) -> str:
    return ts.isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class Chat:
    id: str
    name: str
    user_id: str
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @classmethod
    def new(cls, user_id: str, name: Optional[str] = None) -> "Chat":
        now = _now()
        return cls(
            id=str(uuid.uuid4()),
            name=name or f"Chat {now.strftime('%Y-%m-%d %H:%M:%S')}",
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )

    def to_dict(self, message_count: int = 0) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
            "messageCount": message_count,
        }


@dataclass(frozen=True)
class Message:
    id: str
    chat_id: str
    role: Role
    content: str
    timestamp: datetime = field(default_factory=_now)
    plan: Optional[ProjectPlan] = None

    @classmethod
    def new(cls, chat_id: str, role: Role, content: str, plan: Optional[ProjectPlan] = None) -> "Message":
        return cls(id=str(uuid.uuid4()), chat_id=chat_id, role=role, content=content, plan=plan)

    def to_turn(self) -> ConversationTurn:
        return ConversationTurn(role=self.role, text=self.content)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "role": self.role.value,
            "content": self.content,
            "timestamp": _iso(self.timestamp),
            "chatId": self.chat_id,
        }
        if self.plan is not None:
            data["projectPlan"] = self.plan.to_dict()
        return data


class ChatStore:
    """Chats keyed by id, each with an ordered message list"""

    def __init__(self):
        self._chats: dict[str, Chat] = {}
        self._messages: dict[str, list[Message]] = {}

    # Chat operations

    def create_chat(self, chat: Chat) -> Chat:
        self._chats[chat.id] = chat
        self._messages[chat.id] = []
        logger.info(f"Created chat {chat.id} for user {chat.user_id}")
        return chat

    def get_chat(self, chat_id: str) -> Optional[Chat]:
        return self._chats.get(chat_id)

    def get_chats_by_user(self, user_id: str) -> list[Chat]:
        """User's chats, most recently updated first"""
        chats = [chat for chat in self._chats.values() if chat.user_id == user_id]
        return sorted(chats, key=lambda c: c.updated_at, reverse=True)

    def update_chat(self, chat_id: str, **updates) -> Optional[Chat]:
        chat = self._chats.get(chat_id)
        if chat is None:
            return None
        updated = replace(chat, **updates, updated_at=_now())
        self._chats[chat_id] = updated
        return updated

    def delete_chat(self, chat_id: str) -> bool:
        if chat_id not in self._chats:
            return False
        del self._chats[chat_id]
        self._messages.pop(chat_id, None)
        logger.info(f"Deleted chat {chat_id}")
        return True

    # Message operations

    def add_message(self, message: Message) -> Message:
        self._messages.setdefault(message.chat_id, []).append(message)
        self.update_chat(message.chat_id)
        return message

    def get_messages(self, chat_id: str) -> list[Message]:
        return list(self._messages.get(chat_id, []))

    def get_message_count(self, chat_id: str) -> int:
        return len(self._messages.get(chat_id, []))

    def delete_message(self, message_id: str, chat_id: str) -> bool:
        messages = self._messages.get(chat_id)
        if not messages:
            return False
        for i, message in enumerate(messages):
            if message.id == message_id:
                del messages[i]
                return True
        return False

    # Utility methods

    def clear(self) -> None:
        self._chats.clear()
        self._messages.clear()

    def get_chat_stats(self) -> dict:
        return {
            "total_chats": len(self._chats),
            "total_messages": sum(len(m) for m in self._messages.values()),
        }
