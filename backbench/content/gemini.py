"""
Gemini Content Provider.

Generates learning content with Google's Gemini models through
google-generativeai, using JSON response mode with a per-mode response
schema. Replies are decoded and validated before they are returned.
"""

from __future__ import annotations

import copy
import time
from typing import Any

from loguru import logger

from backbench.config import Settings, get_settings
from backbench.core.models import (
    DiagnosticAssessment,
    ExplanationContent,
    PracticeItem,
    VerificationScenario,
)
from backbench.core.modes import Difficulty, LearningMode

from .prompts import get_prompt, get_system_prompt
from .provider import (
    ContentFetchError,
    parse_json,
    validate_content,
    validate_diagnostic,
)
from .schemas import get_schema


class GeminiContentProvider:
    """Content provider backed by the Gemini API."""

    MAX_OUTPUT_TOKENS = 8192

    def __init__(
        self,
        api_key: str | None = None,
        model_name: str | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize the provider.

        Args:
            api_key: Gemini API key (uses settings if not provided)
            model_name: Model to use (uses settings if not provided)
            settings: Settings instance (uses cached settings if not provided)
        """
        self.settings = settings or get_settings()
        self.api_key = api_key or self.settings.gemini_api_key
        self.model_name = model_name or self.settings.ai_model
        self.temperature = self.settings.ai_temperature

        if not self.api_key:
            raise ValueError("Gemini API key required")

        self._client = None

    @property
    def client(self):
        """Lazy-load Gemini client."""
        if self._client is None:
            import google.generativeai as genai

            genai.configure(api_key=self.api_key)
            self._client = genai.GenerativeModel(
                model_name=self.model_name,
                system_instruction=get_system_prompt(),
            )
        return self._client

    # =========================================================================
    # Content operations
    # =========================================================================

    async def fetch_diagnostic(self, topic: str) -> DiagnosticAssessment:
        data = await self._generate(LearningMode.DIAGNOSTIC, topic)
        return validate_diagnostic(data)

    async def fetch_explanation(self, topic: str) -> ExplanationContent:
        data = await self._generate(LearningMode.EXPLANATION, topic)
        return validate_content(ExplanationContent, data)

    async def fetch_practice(self, topic: str, difficulty: Difficulty) -> PracticeItem:
        data = await self._generate(LearningMode.PRACTICE, topic, difficulty)
        return validate_content(PracticeItem, data)

    async def fetch_verification(self, topic: str) -> VerificationScenario:
        data = await self._generate(LearningMode.VERIFICATION, topic)
        return validate_content(VerificationScenario, data)

    # =========================================================================
    # LLM call
    # =========================================================================

    async def _generate(
        self,
        mode: LearningMode,
        topic: str,
        difficulty: Difficulty | None = None,
    ) -> Any:
        prompt = get_prompt(mode, topic, difficulty)
        text = await self._call_llm(prompt, get_schema(mode))
        return parse_json(text)

    async def _call_llm(self, prompt: str, schema: dict) -> str:
        """Call Gemini in JSON mode and return the raw reply text."""
        started = time.monotonic()
        try:
            response = await self.client.generate_content_async(
                prompt,
                generation_config={
                    "temperature": self.temperature,
                    "max_output_tokens": self.MAX_OUTPUT_TOKENS,
                    "response_mime_type": "application/json",
                    # The SDK rewrites schema dicts in place
                    "response_schema": copy.deepcopy(schema),
                },
            )
            text = response.text
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise ContentFetchError(f"Gemini request failed: {e}") from e

        if not text:
            logger.warning("Empty response from Gemini")
            raise ContentFetchError("Empty response from Gemini")

        latency_ms = int((time.monotonic() - started) * 1000)
        logger.debug(f"Gemini replied in {latency_ms}ms ({len(text)} chars)")
        return text
