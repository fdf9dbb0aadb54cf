"""
JSON Schema Definitions for generated learning content.

Controlled generation schemas for Gemini's JSON mode, one per mode. They
describe the wire format (camelCase keys) that the pydantic models in
backbench.core.models validate on the way back in.
"""

from __future__ import annotations

from backbench.core.modes import Difficulty, LearningMode

QUESTION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "id": {"type": "STRING"},
        "text": {"type": "STRING"},
        "options": {"type": "ARRAY", "items": {"type": "STRING"}},
        "correctIndex": {
            "type": "INTEGER",
            "description": "Zero-based index of the correct option",
        },
        "explanation": {"type": "STRING"},
    },
    "required": ["id", "text", "options", "correctIndex", "explanation"],
}

DIAGNOSTIC_SCHEMA = {
    "type": "ARRAY",
    "items": QUESTION_SCHEMA,
}

EXPLANATION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING"},
        "sections": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING"},
                    "content": {"type": "STRING", "description": "Markdown"},
                },
                "required": ["title", "content"],
            },
        },
    },
    "required": ["title", "sections"],
}

PRACTICE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "question": QUESTION_SCHEMA,
        "difficulty": {
            "type": "STRING",
            "enum": [d.value for d in Difficulty],
        },
    },
    "required": ["question", "difficulty"],
}

VERIFICATION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "scenario": {"type": "STRING"},
        "questions": {
            "type": "ARRAY",
            "items": QUESTION_SCHEMA,
            "description": "Exactly three: Diagnosis, Implementation, Consequence",
        },
    },
    "required": ["scenario", "questions"],
}


def get_schema(mode: LearningMode) -> dict:
    """Response schema for a content-fetching mode."""
    schemas = {
        LearningMode.DIAGNOSTIC: DIAGNOSTIC_SCHEMA,
        LearningMode.EXPLANATION: EXPLANATION_SCHEMA,
        LearningMode.PRACTICE: PRACTICE_SCHEMA,
        LearningMode.VERIFICATION: VERIFICATION_SCHEMA,
    }
    if mode not in schemas:
        raise ValueError(f"No generated content for {mode.value}")
    return schemas[mode]
