"""
Learning modes and mastery levels.

Defines the fixed five-stage progression a learner walks through for a
topic, plus the coarse mastery label advanced at each forward stage:

    DIAGNOSTIC -> EXPLANATION -> PRACTICE -> VERIFICATION -> REFLECTION -> COMPLETE

VERIFICATION has one backward edge to PRACTICE, taken when a verification
step is answered incorrectly.
"""

from __future__ import annotations

from enum import Enum


class AppState(str, Enum):
    """Top-level screen of the host application."""

    HOME = "HOME"  # Topic entry
    LEARNING_ENGINE = "LEARNING_ENGINE"  # Active learning session


class LearningMode(str, Enum):
    """Stage of the learning cycle."""

    DIAGNOSTIC = "DIAGNOSTIC"  # 1. Assess prior knowledge
    EXPLANATION = "EXPLANATION"  # 2. Build mental models
    PRACTICE = "PRACTICE"  # 3. Adaptive exercises
    VERIFICATION = "VERIFICATION"  # 4. Prove application
    REFLECTION = "REFLECTION"  # 5. Lock in memory
    COMPLETE = "COMPLETE"

    @property
    def label(self) -> str:
        """Human-readable name."""
        return self.value.replace("_", " ").title()

    @property
    def progress_percent(self) -> int:
        """Learning depth shown in the session header."""
        return {
            LearningMode.DIAGNOSTIC: 10,
            LearningMode.EXPLANATION: 30,
            LearningMode.PRACTICE: 50,
            LearningMode.VERIFICATION: 75,
            LearningMode.REFLECTION: 90,
            LearningMode.COMPLETE: 100,
        }[self]

    @property
    def fetches_content(self) -> bool:
        """Whether entering this mode requests generated content."""
        return self not in (LearningMode.REFLECTION, LearningMode.COMPLETE)


class MasteryLevel(str, Enum):
    """
    Coarse proficiency label.

    Ordered NOVICE < FOUNDATION < PROFICIENT < MASTER; a session only ever
    moves forward through these.
    """

    NOVICE = "NOVICE"
    FOUNDATION = "FOUNDATION"
    PROFICIENT = "PROFICIENT"
    MASTER = "MASTER"

    @property
    def rank(self) -> int:
        return _MASTERY_ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, MasteryLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, MasteryLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, MasteryLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, MasteryLevel):
            return NotImplemented
        return self.rank >= other.rank

    @property
    def display_name(self) -> str:
        return self.value.title()

    @property
    def emoji(self) -> str:
        """Status glyph for CLI display."""
        return {
            MasteryLevel.NOVICE: "○",
            MasteryLevel.FOUNDATION: "◔",
            MasteryLevel.PROFICIENT: "◕",
            MasteryLevel.MASTER: "●",
        }[self]

    @property
    def color(self) -> str:
        """Rich color for CLI display."""
        return {
            MasteryLevel.NOVICE: "red",
            MasteryLevel.FOUNDATION: "yellow",
            MasteryLevel.PROFICIENT: "cyan",
            MasteryLevel.MASTER: "green",
        }[self]


_MASTERY_ORDER = [
    MasteryLevel.NOVICE,
    MasteryLevel.FOUNDATION,
    MasteryLevel.PROFICIENT,
    MasteryLevel.MASTER,
]


class Difficulty(str, Enum):
    """Practice item difficulty."""

    EASY = "easy"  # Accepted from the provider, never requested
    MEDIUM = "medium"
    HARD = "hard"
