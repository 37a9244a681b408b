"""
Provider interface
The orchestrator only needs one async text-completion operation, so any
client that implements generate() can stand in for Gemini (tests use stubs).
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

from google.genai import types

if TYPE_CHECKING:
    from orchestration.types import ProviderResult


class TextProvider(Protocol):
    """
    LLM provider protocol.

    generate() must not raise for remote failures: auth, quota and
    connectivity problems come back as ProviderResult.failure(...).
    """

    name: str

    async def generate(self, system_instruction: str, contents: Sequence[types.Content]) -> ProviderResult:
        ...
