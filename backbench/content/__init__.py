"""
Content generation for the learning engine.

Components:
- provider: ContentProvider protocol, error taxonomy, JSON validation
- gemini: Gemini-backed provider (JSON mode + response schemas)
- samples: Deterministic offline provider
- prompts/schemas: Per-mode prompt templates and response schemas
"""

from .provider import (
    ContentFetchError,
    ContentGenerationError,
    ContentParseError,
    ContentProvider,
    get_content_provider,
    parse_json,
)
from .samples import SampleContentProvider

__all__ = [
    "ContentProvider",
    "ContentGenerationError",
    "ContentFetchError",
    "ContentParseError",
    "SampleContentProvider",
    "get_content_provider",
    "parse_json",
]
