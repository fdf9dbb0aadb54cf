"""
Content Provider boundary.

The learning engine never trusts generated content: every provider returns
fully validated models or raises a ``ContentGenerationError``. There is no
partial content and no retry at this layer.
"""

from __future__ import annotations

import json
import re
from typing import Any, Protocol, TypeVar, runtime_checkable

from loguru import logger
from pydantic import BaseModel, ValidationError

from backbench.config import Settings, get_settings
from backbench.core.models import (
    DiagnosticAssessment,
    ExplanationContent,
    PracticeItem,
    VerificationScenario,
)
from backbench.core.modes import Difficulty

ModelT = TypeVar("ModelT", bound=BaseModel)

_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)


class ContentGenerationError(Exception):
    """Generated content could not be obtained."""


class ContentFetchError(ContentGenerationError):
    """The provider call failed outright (network, auth, rate limit, empty reply)."""


class ContentParseError(ContentGenerationError):
    """The provider replied, but not with data matching the expected schema."""


@runtime_checkable
class ContentProvider(Protocol):
    """Source of generated learning content, one operation per mode."""

    async def fetch_diagnostic(self, topic: str) -> DiagnosticAssessment:
        ...

    async def fetch_explanation(self, topic: str) -> ExplanationContent:
        ...

    async def fetch_practice(self, topic: str, difficulty: Difficulty) -> PracticeItem:
        ...

    async def fetch_verification(self, topic: str) -> VerificationScenario:
        ...


# =============================================================================
# Parsing helpers
# =============================================================================


def parse_json(text: str | None) -> Any:
    """Decode a model reply, tolerating markdown code fences around the JSON."""
    if not text or not text.strip():
        raise ContentParseError("Empty response from content provider")

    cleaned = _FENCE_PATTERN.sub("", text).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {e}")
        raise ContentParseError("Failed to parse knowledge engine response.") from e


def validate_content(model: type[ModelT], data: Any) -> ModelT:
    """Validate decoded JSON against a content model."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error(f"{model.__name__} failed validation: {e.error_count()} error(s)")
        raise ContentParseError(f"Malformed {model.__name__}: {e}") from e


def validate_diagnostic(data: Any) -> DiagnosticAssessment:
    """The diagnostic reply is a bare array of questions."""
    if isinstance(data, dict) and "questions" in data:
        return validate_content(DiagnosticAssessment, data)
    if not isinstance(data, list):
        raise ContentParseError(
            f"Malformed DiagnosticAssessment: expected a list, got {type(data).__name__}"
        )
    return validate_content(DiagnosticAssessment, {"questions": data})


# =============================================================================
# Provider factory
# =============================================================================


def get_content_provider(
    settings: Settings | None = None,
    force_sample: bool = False,
) -> ContentProvider:
    """
    Pick the provider for the current configuration.

    Falls back to deterministic sample content when no Gemini key is
    configured.
    """
    from .gemini import GeminiContentProvider
    from .samples import SampleContentProvider

    settings = settings or get_settings()
    if force_sample:
        logger.info("Using sample content provider")
        return SampleContentProvider()
    if not settings.has_ai_configured:
        logger.warning("No Gemini API key configured - using sample content")
        return SampleContentProvider()
    return GeminiContentProvider(settings=settings)
