"""
Learning session state machine.

``LearningEngine`` owns the single mutable ``SessionState`` of a session and
is the only place it changes. Every change happens through a named
transition method; each transition bumps ``epoch`` so asynchronous work
started under an earlier mode can tell that it is stale.

Transition table:

    DIAGNOSTIC   --complete_diagnostic-->   EXPLANATION   (diagnostic_score recorded)
    EXPLANATION  --finish_explanation-->    PRACTICE      (mastery FOUNDATION)
    PRACTICE     --enter_verification-->    VERIFICATION  (gated on accuracy)
    VERIFICATION --fail_verification-->     PRACTICE      (mastery unchanged)
    VERIFICATION --complete_verification--> REFLECTION    (mastery PROFICIENT)
    REFLECTION   --commit_reflection-->     COMPLETE      (mastery MASTER)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from loguru import logger

from backbench.core.modes import LearningMode, MasteryLevel

DEFAULT_GATE_ACCURACY = 60

TransitionListener = Callable[[LearningMode, LearningMode], None]


class TransitionError(Exception):
    """Raised when a transition is not available from the current state."""


@dataclass
class SessionState:
    """Observable progress of one learning session."""

    mode: LearningMode = LearningMode.DIAGNOSTIC
    mastery: MasteryLevel = MasteryLevel.NOVICE
    practice_accuracy: int = 0  # 0-100
    questions_answered: int = 0
    diagnostic_score: int | None = None


@dataclass(frozen=True)
class ModeTicket:
    """Identifies the mode instance an asynchronous operation was started in."""

    mode: LearningMode
    epoch: int


def round_half_up(value: float) -> int:
    """Round .5 away from zero for the non-negative values used here."""
    return int(value + 0.5)


@dataclass
class PracticeHistory:
    """Append-only record of practice outcomes for the whole session."""

    outcomes: list[bool] = field(default_factory=list)

    def append(self, correct: bool) -> None:
        self.outcomes.append(bool(correct))

    @property
    def correct_count(self) -> int:
        return sum(self.outcomes)

    @property
    def accuracy(self) -> int:
        """Percentage of correct answers, 0 for an empty history."""
        if not self.outcomes:
            return 0
        return round_half_up(100 * self.correct_count / len(self.outcomes))

    def __len__(self) -> int:
        return len(self.outcomes)


class LearningEngine:
    """The session state machine."""

    def __init__(
        self,
        state: SessionState | None = None,
        gate_accuracy: int = DEFAULT_GATE_ACCURACY,
    ):
        self.state = state or SessionState()
        self.history = PracticeHistory()
        self.gate_accuracy = gate_accuracy
        self.epoch = 0
        self._listeners: list[TransitionListener] = []

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def mode(self) -> LearningMode:
        return self.state.mode

    @property
    def mastery(self) -> MasteryLevel:
        return self.state.mastery

    def ticket(self) -> ModeTicket:
        """Snapshot of the current mode instance."""
        return ModeTicket(mode=self.state.mode, epoch=self.epoch)

    def is_current(self, ticket: ModeTicket) -> bool:
        """True while no transition has happened since ``ticket`` was taken."""
        return ticket.epoch == self.epoch and ticket.mode == self.state.mode

    @property
    def can_enter_verification(self) -> bool:
        """
        Verification gate.

        Open once accuracy reaches the floor, and also before any practice
        question has been answered (no accuracy signal exists yet).
        """
        return (
            self.state.practice_accuracy >= self.gate_accuracy
            or self.state.questions_answered == 0
        )

    def on_transition(self, listener: TransitionListener) -> None:
        """Register a callback invoked as ``listener(old_mode, new_mode)``."""
        self._listeners.append(listener)

    # =========================================================================
    # Transitions
    # =========================================================================

    def complete_diagnostic(self, score: int) -> None:
        self._require(LearningMode.DIAGNOSTIC, "complete diagnostic")
        self.state.diagnostic_score = score
        self._move(LearningMode.EXPLANATION)

    def finish_explanation(self) -> None:
        self._require(LearningMode.EXPLANATION, "finish explanation")
        self._move(LearningMode.PRACTICE, MasteryLevel.FOUNDATION)

    def record_practice_answer(self, correct: bool) -> int:
        """Append an outcome and recompute accuracy. Not a mode change."""
        self._require(LearningMode.PRACTICE, "record a practice answer")
        self.history.append(correct)
        self.state.practice_accuracy = self.history.accuracy
        self.state.questions_answered += 1
        logger.debug(
            f"Practice answer {'correct' if correct else 'incorrect'}: "
            f"accuracy={self.state.practice_accuracy}% "
            f"answered={self.state.questions_answered}"
        )
        return self.state.practice_accuracy

    def enter_verification(self) -> None:
        self._require(LearningMode.PRACTICE, "enter verification")
        if not self.can_enter_verification:
            raise TransitionError(
                f"Verification locked: accuracy {self.state.practice_accuracy}% "
                f"is below {self.gate_accuracy}%"
            )
        self._move(LearningMode.VERIFICATION)

    def fail_verification(self) -> None:
        self._require(LearningMode.VERIFICATION, "fail verification")
        self._move(LearningMode.PRACTICE)

    def complete_verification(self) -> None:
        self._require(LearningMode.VERIFICATION, "complete verification")
        self._move(LearningMode.REFLECTION, MasteryLevel.PROFICIENT)

    def commit_reflection(self) -> None:
        self._require(LearningMode.REFLECTION, "commit reflection")
        self._move(LearningMode.COMPLETE, MasteryLevel.MASTER)

    # =========================================================================
    # Internals
    # =========================================================================

    def _require(self, mode: LearningMode, action: str) -> None:
        if self.state.mode != mode:
            raise TransitionError(
                f"Cannot {action} while in {self.state.mode.value} "
                f"(requires {mode.value})"
            )

    def _move(self, mode: LearningMode, mastery: MasteryLevel | None = None) -> None:
        old = self.state.mode
        self.state.mode = mode
        # Mastery never decreases
        if mastery is not None and mastery > self.state.mastery:
            self.state.mastery = mastery
        self.epoch += 1

        logger.info(
            f"Mode {old.value} -> {mode.value} (mastery {self.state.mastery.value})"
        )
        for listener in list(self._listeners):
            listener(old, mode)
