"""
Core Module - Shared domain models.

Components:
- modes: Learning modes, mastery levels, difficulty
- models: Provider content models and transient session objects
- log_setup: loguru configuration
"""

from backbench.core.models import (
    DiagnosticAssessment,
    ExplanationContent,
    ExplanationSection,
    Feedback,
    InteractionState,
    PracticeItem,
    Question,
    Topic,
    VerificationScenario,
)
from backbench.core.modes import AppState, Difficulty, LearningMode, MasteryLevel

__all__ = [
    # Modes
    "AppState",
    "Difficulty",
    "LearningMode",
    "MasteryLevel",
    # Content
    "Question",
    "DiagnosticAssessment",
    "ExplanationSection",
    "ExplanationContent",
    "PracticeItem",
    "VerificationScenario",
    # Session objects
    "Topic",
    "Feedback",
    "InteractionState",
]
