"""
Chat Handlers
Chat CRUD plus the send-message flow that calls the LLM orchestrator.

Handlers return JSON-ready dicts; failures raise ChatHandlerError subclasses
or the orchestrator's LLMServiceError kinds (see handlers.types.to_error_response).
"""
from typing import Optional

from orchestration import LLMOrchestrator, Role
from utils.chat_store import Chat, ChatStore, Message
from utils.logger import get_logger
from .types import ChatAccessDeniedError, ChatNotFoundError, InvalidMessageError

logger = get_logger(__name__)


def _get_owned_chat(store: ChatStore, user_id: str, chat_id: str) -> Chat:
    chat = store.get_chat(chat_id)
    if chat is None:
        raise ChatNotFoundError(chat_id)
    if chat.user_id != user_id:
        raise ChatAccessDeniedError(chat_id)
    return chat


def handle_list_chats(store: ChatStore, user_id: str) -> dict:
    chats = store.get_chats_by_user(user_id)
    return {"chats": [chat.to_dict(store.get_message_count(chat.id)) for chat in chats]}


def handle_create_chat(store: ChatStore, user_id: str, name: Optional[str] = None) -> dict:
    chat = store.create_chat(Chat.new(user_id, name))
    return chat.to_dict(message_count=0)


def handle_get_chat(store: ChatStore, user_id: str, chat_id: str) -> dict:
    chat = _get_owned_chat(store, user_id, chat_id)
    return chat.to_dict(store.get_message_count(chat.id))


def handle_delete_chat(store: ChatStore, user_id: str, chat_id: str) -> bool:
    _get_owned_chat(store, user_id, chat_id)
    return store.delete_chat(chat_id)


def handle_get_messages(store: ChatStore, user_id: str, chat_id: str) -> dict:
    _get_owned_chat(store, user_id, chat_id)
    return {"messages": [m.to_dict() for m in store.get_messages(chat_id)]}


async def handle_send_message(
    store: ChatStore,
    orchestrator: LLMOrchestrator,
    user_id: str,
    chat_id: str,
    content: str | None,
) -> dict:
    """
    Store the user's message, generate the assistant reply, store it too.

    The user message stays stored even if generation fails.
    """
    if not content or not content.strip():
        raise InvalidMessageError("Message content is required")

    _get_owned_chat(store, user_id, chat_id)
    text = content.strip()

    # History is everything before the new message
    history = [m.to_turn() for m in store.get_messages(chat_id)]

    user_message = store.add_message(Message.new(chat_id, Role.USER, text))

    llm_response = await orchestrator.generate_response(history, text)

    assistant_message = store.add_message(
        Message.new(chat_id, Role.ASSISTANT, llm_response.content, plan=llm_response.plan)
    )
    logger.info(f"Chat {chat_id}: replied with plan={llm_response.plan is not None}")

    return {
        "userMessage": user_message.to_dict(),
        "assistantMessage": assistant_message.to_dict(),
        "projectPlan": llm_response.plan.to_dict() if llm_response.plan else None,
    }
