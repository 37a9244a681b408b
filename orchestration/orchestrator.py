"""
LLM Orchestrator
Turns a conversation plus a new user message into a reply:

  classify intent → build system prompt → format history
  → rate gate + retry the provider call → extract the plan block

Failures leave as one of AuthError, RateLimitError, NetworkError or
UnknownError. Components are passed in, and create_orchestrator() wires the
process-wide ones (one RateGate, one provider client) at startup.
"""
from typing import Optional, Sequence

from config import Settings, settings as default_settings
from services.base import TextProvider
from utils.logger import get_logger
from .classifier import PlanRequestClassifier
from .errors import LLMServiceError, ProviderCallError, classify_error
from .extractor import ResponseExtractor
from .prompts import PromptBuilder
from .rate_limiter import RateGate
from .retry import RetryPolicy
from .types import ConversationTurn, LLMResponse

logger = get_logger(__name__)


class LLMOrchestrator:
    """Composes classification, prompting, throttled retries and extraction"""

    def __init__(
        self,
        provider: TextProvider,
        retry_policy: RetryPolicy,
        classifier: Optional[PlanRequestClassifier] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        extractor: Optional[ResponseExtractor] = None,
    ):
        self.provider = provider
        self.retry_policy = retry_policy
        self.classifier = classifier or PlanRequestClassifier()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.extractor = extractor or ResponseExtractor()

    async def _complete(self, system_prompt: str, contents: list) -> str:
        """One provider attempt; failure results are raised so the retry policy sees them"""
        result = await self.provider.generate(system_prompt, contents)
        if result.metadata:
            logger.debug(f"Provider result metadata: {result.metadata}")
        if not result.ok:
            raise ProviderCallError(result.error, result.error_kind)
        return result.text

    async def generate_response(
        self,
        history: Sequence[ConversationTurn],
        user_text: str,
    ) -> LLMResponse:
        """
        Generate the assistant reply for user_text given the prior turns.

        history excludes the new user message; it is appended here.
        """
        try:
            classification = self.classifier.classify(user_text)
            logger.info(
                f"Project plan detection result: {classification.is_plan_request} "
                f"for message: {user_text[:100]}"
            )

            system_prompt = self.prompt_builder.build_system_prompt(classification.is_plan_request)
            contents = self.prompt_builder.build_contents(history, user_text)

            raw_text = await self.retry_policy.execute(
                lambda: self._complete(system_prompt, contents)
            )
            logger.debug(f"Original LLM response (first 500 chars): {raw_text[:500]}")

            response = self.extractor.extract(raw_text)
            if classification.is_plan_request and response.plan is None:
                logger.warning("Project plan was requested but the reply carried no parsable plan block")

            return response

        except LLMServiceError:
            raise
        except Exception as e:
            logger.exception("LLM service error")
            raise classify_error(e) from e

    async def test_connection(self) -> bool:
        """Cheap round trip with a reduced retry budget"""
        try:
            text = await self.retry_policy.execute(
                lambda: self._complete(
                    self.prompt_builder.build_system_prompt(False),
                    self.prompt_builder.build_contents([], "Hello"),
                ),
                max_retries=2,
                base_delay=0.5,
            )
            return bool(text)
        except Exception as e:
            logger.error(f"LLM connection test failed: {e}")
            return False


def create_orchestrator(
    settings: Settings = default_settings,
    provider: Optional[TextProvider] = None,
) -> LLMOrchestrator:
    """Build the orchestrator and its shared components from settings"""
    missing = settings.validate()
    if missing and provider is None:
        logger.warning(f"Missing configuration: {', '.join(missing)}")

    rate_gate = RateGate(min_interval=settings.MIN_REQUEST_INTERVAL)
    retry_policy = RetryPolicy(
        rate_gate,
        max_retries=settings.MAX_RETRIES,
        base_delay=settings.RETRY_BASE_DELAY,
        max_jitter=settings.RETRY_MAX_JITTER,
    )

    if provider is None:
        # services.gemini_provider imports orchestration.types
        from services.gemini_provider import GeminiProvider

        provider = GeminiProvider(
            api_key=settings.GEMINI_API_KEY,
            model_name=settings.GEMINI_MODEL,
            temperature=settings.TEMPERATURE,
        )

    return LLMOrchestrator(provider=provider, retry_policy=retry_policy)
