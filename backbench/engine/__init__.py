"""
Learning engine: state machine, mode controllers and session shell.

Components:
- state: SessionState, PracticeHistory and the LearningEngine state machine
- timers: Cancellable delayed transitions
- controllers: One controller per learning mode
- session: LearningSession, the shell hosting the active controller
- host: LearningApp, topic entry <-> session
"""

from .controllers import (
    CONTROLLERS,
    CompletionController,
    ControllerStatus,
    DiagnosticController,
    ExplanationController,
    ModeController,
    PracticeController,
    ReflectionController,
    VerificationController,
    build_controller,
)
from .host import LearningApp
from .session import LearningSession
from .state import LearningEngine, ModeTicket, PracticeHistory, SessionState, TransitionError
from .timers import ScheduledTransition

__all__ = [
    "CONTROLLERS",
    "ControllerStatus",
    "ModeController",
    "DiagnosticController",
    "ExplanationController",
    "PracticeController",
    "VerificationController",
    "ReflectionController",
    "CompletionController",
    "build_controller",
    "LearningApp",
    "LearningSession",
    "LearningEngine",
    "ModeTicket",
    "PracticeHistory",
    "SessionState",
    "TransitionError",
    "ScheduledTransition",
]
