"""
Gemini Provider
Async text completion against Google Gemini via the google-genai SDK.

Responses and errors are decoded here, at the boundary, into ProviderResult
so nothing above this module handles SDK objects.
"""
from typing import Sequence

import httpx
from google import genai
from google.genai import errors, types

from config import settings
from orchestration.types import ProviderErrorKind, ProviderResult
from utils.logger import get_logger

logger = get_logger(__name__)


def response_text(response: types.GenerateContentResponse) -> str:
    """Concatenate the text parts of every candidate"""
    text_parts = []
    for candidate in response.candidates or []:
        # Check if content exists before iterating
        if candidate.content and candidate.content.parts:
            for part in candidate.content.parts:
                if part.text:
                    text_parts.append(part.text)
    return "".join(text_parts)


def finish_reason(response: types.GenerateContentResponse) -> str | None:
    if not response.candidates:
        feedback = response.prompt_feedback
        if feedback and feedback.block_reason:
            return f"blocked: {feedback.block_reason}"
        return None
    reason = response.candidates[0].finish_reason
    return str(reason) if reason else None


class GeminiProvider:
    """Gemini implementation of the TextProvider protocol"""

    name = "gemini"

    def __init__(
        self,
        api_key: str | None = None,
        model_name: str | None = None,
        temperature: float | None = None,
        client: genai.Client | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model_name = model_name or settings.GEMINI_MODEL
        self.temperature = temperature if temperature is not None else settings.TEMPERATURE
        self._client = client

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate(self, system_instruction: str, contents: Sequence[types.Content]) -> ProviderResult:
        if self._client is None and not self.api_key:
            return ProviderResult.failure("GEMINI_API_KEY is not configured")

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=list(contents),
                config=types.GenerateContentConfig(
                    system_instruction=system_instruction,
                    temperature=self.temperature,
                ),
            )
        except errors.APIError as e:
            logger.warning(f"Gemini API error: {e.code} {e.status}")
            return ProviderResult.failure(f"{e.code} {e.status}: {e.message}", code=e.code)
        except httpx.TimeoutException as e:
            return ProviderResult.failure(f"network timeout: {e}", ProviderErrorKind.TIMEOUT)
        except httpx.TransportError as e:
            return ProviderResult.failure(f"network error: {e}", ProviderErrorKind.NETWORK)

        text = response_text(response)
        if not text:
            reason = finish_reason(response)
            return ProviderResult.failure(
                f"empty response from model (finish_reason={reason})",
                ProviderErrorKind.EMPTY,
            )

        logger.info(f"Gemini response length: {len(text)}")
        return ProviderResult.success(text, finish_reason=finish_reason(response))
