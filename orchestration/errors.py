"""
LLM Service Errors
The four outward-facing failure kinds of the orchestrator, plus the
text-based mapping from provider failures onto them.
"""
from .types import ProviderErrorKind


class LLMServiceError(Exception):
    """
    Base class for orchestrator failures.

    Attributes:
        code: machine readable error code
        message: user readable message
        http_status: status code the chat layer should answer with
    """
    code = "LLM_ERROR"
    http_status = 500
    default_message = "Failed to generate AI response. Please try again."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class AuthError(LLMServiceError):
    """Bad or missing provider credential. Never retried."""
    code = "AUTH_ERROR"
    http_status = 503
    default_message = "Invalid or missing Gemini API key. Please check your configuration."


class RateLimitError(LLMServiceError):
    """Provider quota or backpressure, surfaced after retries are exhausted"""
    code = "RATE_LIMIT"
    http_status = 429
    default_message = "Rate limit exceeded. Please try again in a moment."


class NetworkError(LLMServiceError):
    """Transient connectivity failure, surfaced after retries are exhausted"""
    code = "NETWORK_ERROR"
    http_status = 503
    default_message = "Network connection failed. Please check your internet connection and try again."


class UnknownError(LLMServiceError):
    code = "UNKNOWN_ERROR"
    http_status = 500


class ProviderCallError(Exception):
    """Raised inside a retried operation when the provider returned a failure result"""

    def __init__(self, message: str, kind=None):
        self.kind = kind
        super().__init__(message)


# Checked in order; the first group with a matching marker wins
AUTH_MARKERS = ("api_key", "api key", "unauthenticated", "permission_denied")
RATE_LIMIT_MARKERS = ("quota", "rate limit", "resource_exhausted")
NETWORK_MARKERS = ("fetch failed", "network")


def classify_error(error: BaseException) -> LLMServiceError:
    """Map any failure onto one of the four orchestrator error kinds"""
    if isinstance(error, LLMServiceError):
        return error

    text = str(error).lower()

    if any(marker in text for marker in AUTH_MARKERS):
        return AuthError()
    if any(marker in text for marker in RATE_LIMIT_MARKERS):
        return RateLimitError()
    # Kind decoded by the provider
    if getattr(error, "kind", None) in (ProviderErrorKind.NETWORK, ProviderErrorKind.TIMEOUT):
        return NetworkError()
    if any(marker in text for marker in NETWORK_MARKERS):
        return NetworkError()
    return UnknownError()
