"""
Orchestration Module - LLM response orchestration

- RateGate: minimum spacing between outbound LLM calls
- RetryPolicy: bounded retries with exponential backoff and jitter
- PlanRequestClassifier: decides if a message asks for a project plan
- PromptBuilder: system prompts and Gemini conversation contents
- ResponseExtractor: pulls the tagged project plan out of a reply
- LLMOrchestrator: composes all of the above
"""
from .types import (
    Role,
    ConversationTurn,
    Deliverable,
    Workstream,
    ProjectPlan,
    PlanFormatError,
    LLMResponse,
    ProviderResult,
    ProviderErrorKind,
)
from .errors import (
    LLMServiceError,
    AuthError,
    RateLimitError,
    NetworkError,
    UnknownError,
    ProviderCallError,
    classify_error,
)
from .rate_limiter import RateGate
from .retry import RetryPolicy, RetryState, is_retryable_error, RETRYABLE_MARKERS
from .classifier import PlanRequestClassifier, PlanClassification, is_plan_request, PLAN_KEYWORDS, PLAN_PATTERNS
from .prompts import PromptBuilder, PLAN_START_TAG, PLAN_END_TAG
from .extractor import ResponseExtractor
from .orchestrator import LLMOrchestrator, create_orchestrator

__all__ = [
    # Types
    "Role",
    "ConversationTurn",
    "Deliverable",
    "Workstream",
    "ProjectPlan",
    "PlanFormatError",
    "LLMResponse",
    "ProviderResult",
    "ProviderErrorKind",
    # Errors
    "LLMServiceError",
    "AuthError",
    "RateLimitError",
    "NetworkError",
    "UnknownError",
    "ProviderCallError",
    "classify_error",
    # Throttling and retries
    "RateGate",
    "RetryPolicy",
    "RetryState",
    "is_retryable_error",
    "RETRYABLE_MARKERS",
    # Intent and prompting
    "PlanRequestClassifier",
    "PlanClassification",
    "is_plan_request",
    "PLAN_KEYWORDS",
    "PLAN_PATTERNS",
    "PromptBuilder",
    "PLAN_START_TAG",
    "PLAN_END_TAG",
    # Extraction
    "ResponseExtractor",
    # Main orchestrator
    "LLMOrchestrator",
    "create_orchestrator",
]
