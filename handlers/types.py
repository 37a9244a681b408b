"""
Handler types
Errors raised by chat handlers and their mapping to error responses.
"""
from orchestration.errors import AuthError, LLMServiceError
from utils.logger import get_logger

logger = get_logger(__name__)


class ChatHandlerError(Exception):
    http_status = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ChatNotFoundError(ChatHandlerError):
    http_status = 404

    def __init__(self, chat_id: str):
        self.chat_id = chat_id
        super().__init__("Chat not found")


class ChatAccessDeniedError(ChatHandlerError):
    http_status = 403

    def __init__(self, chat_id: str):
        self.chat_id = chat_id
        super().__init__("Access denied")


class InvalidMessageError(ChatHandlerError):
    http_status = 400


def to_error_response(error: Exception) -> tuple[dict, int]:
    """
    Map an exception to ({"error": message}, status).
    Auth problems read as service unavailable, everything unexpected as a generic failure.
    """
    if isinstance(error, ChatHandlerError):
        return {"error": error.message}, error.http_status
    if isinstance(error, AuthError):
        return {"error": "AI service unavailable. Please check API configuration."}, error.http_status
    if isinstance(error, LLMServiceError):
        return {"error": error.message, "code": error.code}, error.http_status

    logger.error(f"Unhandled handler error: {error!r}")
    return {"error": "Failed to send message"}, 500
