"""
Content and interaction models.

Content objects arrive from an untrusted generative provider, so they are
pydantic models: anything that does not match the expected shape fails
validation instead of reaching the state machine. Field names follow
Python conventions; the camelCase names used on the wire are accepted as
aliases.

Transient session objects (topic, feedback, per-question interaction state)
are plain dataclasses.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .modes import Difficulty

# Verification steps, in the fixed order they are asked
VERIFICATION_PHASES = ("Diagnosis", "Implementation", "Consequence")

DIAGNOSTIC_QUESTION_COUNT = 3


class ContentModel(BaseModel):
    """Base for provider content: immutable, alias-aware."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class Question(ContentModel):
    """A multiple-choice question with its explanation."""

    id: str
    text: str
    options: list[str] = Field(min_length=2)
    correct_index: int = Field(alias="correctIndex")
    explanation: str

    @model_validator(mode="after")
    def _correct_index_in_range(self) -> Question:
        if not 0 <= self.correct_index < len(self.options):
            raise ValueError(
                f"correctIndex {self.correct_index} outside options "
                f"(0..{len(self.options) - 1})"
            )
        return self

    def is_correct(self, index: int) -> bool:
        return index == self.correct_index

    def check_option(self, index: int) -> None:
        """Raise if index does not name one of the options."""
        if not 0 <= index < len(self.options):
            raise ValueError(
                f"Option {index} out of range for question {self.id!r} "
                f"({len(self.options)} options)"
            )


class DiagnosticAssessment(ContentModel):
    """The initial three-question assessment."""

    questions: list[Question] = Field(
        min_length=DIAGNOSTIC_QUESTION_COUNT,
        max_length=DIAGNOSTIC_QUESTION_COUNT,
    )


class ExplanationSection(ContentModel):
    title: str
    content: str  # Markdown


class ExplanationContent(ContentModel):
    """Slide deck explaining the topic."""

    title: str
    sections: list[ExplanationSection] = Field(min_length=1)


class PracticeItem(ContentModel):
    """One practice question; replaced wholesale after each answer."""

    question: Question
    difficulty: Difficulty


class VerificationScenario(ContentModel):
    """A case study with Diagnosis/Implementation/Consequence questions."""

    scenario: str
    questions: list[Question] = Field(
        min_length=len(VERIFICATION_PHASES),
        max_length=len(VERIFICATION_PHASES),
    )


# =============================================================================
# Session-side objects
# =============================================================================


@dataclass(frozen=True)
class Topic:
    """The subject of one learning session."""

    query: str
    timestamp: int  # epoch milliseconds

    @classmethod
    def create(cls, raw: str) -> Topic:
        """Build a topic from user input, rejecting blank entries."""
        query = (raw or "").strip()
        if not query:
            raise ValueError("Topic must not be empty")
        return cls(query=query, timestamp=int(time.time() * 1000))


@dataclass(frozen=True)
class Feedback:
    """Immediate result of answering a question."""

    is_correct: bool
    text: str


@dataclass
class InteractionState:
    """Per-question UI state, reset at the start of every question."""

    selected_option: int | None = None
    feedback: Feedback | None = None

    @property
    def answered(self) -> bool:
        return self.feedback is not None

    def record(self, index: int, question: Question) -> Feedback:
        self.selected_option = index
        self.feedback = Feedback(
            is_correct=question.is_correct(index),
            text=question.explanation,
        )
        return self.feedback

    def reset(self) -> None:
        self.selected_option = None
        self.feedback = None
