"""
Mode controllers.

Each learning mode has one controller that fetches the mode's content,
holds its interactive state and calls the engine's transitions. Controllers
are registered per mode and looked up by the session when the mode changes:

- present content only once ``status`` is READY
- ``answer()`` records a selection and returns immediate feedback
- actions that are unavailable return False instead of raising
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from loguru import logger

from backbench.content.provider import ContentGenerationError
from backbench.core.models import (
    VERIFICATION_PHASES,
    ExplanationContent,
    ExplanationSection,
    Feedback,
    InteractionState,
    PracticeItem,
    Question,
    VerificationScenario,
)
from backbench.core.modes import Difficulty, LearningMode

from .state import LearningEngine, ModeTicket
from .timers import ScheduledTransition

if TYPE_CHECKING:
    from .session import LearningSession

RESTART_NOTICE = (
    "Application Error detected. Returning to Practice Cycle to reinforce fundamentals."
)
FAILED_CHECK_NOTICE = "Mastery Check Failed. Re-initializing Practice..."


class ControllerStatus(str, Enum):
    """Content state of a controller."""

    LOADING = "loading"  # Fetch outstanding
    READY = "ready"  # Content available
    STALLED = "stalled"  # Fetch failed; no content, no retry


# Controller registry - populated by @register decorator
CONTROLLERS: dict[LearningMode, type[ModeController]] = {}


def register(mode: LearningMode):
    """Decorator to register the controller for a mode."""
    def decorator(cls):
        cls.mode = mode
        CONTROLLERS[mode] = cls
        return cls
    return decorator


def build_controller(mode: LearningMode, session: LearningSession) -> ModeController:
    """Instantiate the controller registered for a mode."""
    return CONTROLLERS[mode](session)


class ModeController:
    """Shared fetch and interaction plumbing."""

    mode: LearningMode

    def __init__(self, session: LearningSession):
        self.session = session
        self.status = (
            ControllerStatus.LOADING if self.mode.fetches_content else ControllerStatus.READY
        )
        self.error: ContentGenerationError | None = None
        self.interaction = InteractionState()

    @property
    def engine(self) -> LearningEngine:
        return self.session.engine

    @property
    def topic(self) -> str:
        return self.session.topic.query

    @property
    def ready(self) -> bool:
        return self.status == ControllerStatus.READY

    @property
    def feedback(self) -> Feedback | None:
        return self.interaction.feedback

    async def load(self) -> None:
        """
        Fetch this mode's content.

        Results arriving after the engine has left the mode instance the
        fetch was started in are dropped.
        """
        if not self.mode.fetches_content:
            self.status = ControllerStatus.READY
            return

        ticket = self.engine.ticket()
        self.status = ControllerStatus.LOADING
        self.error = None
        self.interaction.reset()
        self._clear()

        logger.debug(f"Fetching {self.mode.value} content for {self.topic!r}")
        try:
            content = await self._fetch()
        except ContentGenerationError as e:
            if self._is_stale(ticket):
                return
            logger.error(f"Content load failed for {self.mode.value}: {type(e).__name__}: {e}")
            self.error = e
            self.status = ControllerStatus.STALLED
            return

        if self._is_stale(ticket):
            return
        self._apply(content)
        self.status = ControllerStatus.READY
        logger.debug(f"{self.mode.value} content ready")

    def dispose(self) -> None:
        """Release anything tied to this mode instance."""

    def _is_stale(self, ticket: ModeTicket) -> bool:
        if self.session.closed:
            logger.debug(f"Discarding {ticket.mode.value} content for closed session")
            return True
        if self.engine.is_current(ticket):
            return False
        logger.debug(
            f"Discarding stale {ticket.mode.value} content "
            f"(now {self.engine.mode.value}, epoch {self.engine.epoch})"
        )
        return True

    def _check_answerable(self, question: Question | None, index: int) -> bool:
        if not self.ready or question is None or self.interaction.answered:
            return False
        question.check_option(index)
        return True

    async def _fetch(self) -> Any:
        raise NotImplementedError

    def _apply(self, content: Any) -> None:
        raise NotImplementedError

    def _clear(self) -> None:
        """Drop content before a (re)fetch."""


# =============================================================================
# Diagnostic
# =============================================================================


@register(LearningMode.DIAGNOSTIC)
class DiagnosticController(ModeController):
    """Three questions, one attempt each, scored."""

    def __init__(self, session: LearningSession):
        super().__init__(session)
        self.questions: list[Question] = []
        self.index = 0
        self.score = 0

    async def _fetch(self):
        return await self.session.provider.fetch_diagnostic(self.topic)

    def _apply(self, content) -> None:
        self.questions = list(content.questions)
        self.index = 0
        self.score = 0

    @property
    def current_question(self) -> Question | None:
        if 0 <= self.index < len(self.questions):
            return self.questions[self.index]
        return None

    @property
    def is_last(self) -> bool:
        return self.index >= len(self.questions) - 1

    def answer(self, index: int) -> Feedback | None:
        question = self.current_question
        if not self._check_answerable(question, index):
            return None
        feedback = self.interaction.record(index, question)
        if feedback.is_correct:
            self.score += 1
        return feedback

    def proceed(self) -> bool:
        """Move to the next question, or on to explanation after the last."""
        if not self.interaction.answered:
            return False
        if not self.is_last:
            self.index += 1
            self.interaction.reset()
            return True
        self.engine.complete_diagnostic(self.score)
        return True


# =============================================================================
# Explanation
# =============================================================================


@register(LearningMode.EXPLANATION)
class ExplanationController(ModeController):
    """Slide-by-slide walk through the explanation sections."""

    def __init__(self, session: LearningSession):
        super().__init__(session)
        self.content: ExplanationContent | None = None
        self.index = 0

    async def _fetch(self):
        return await self.session.provider.fetch_explanation(self.topic)

    def _apply(self, content) -> None:
        self.content = content
        self.index = 0

    @property
    def total(self) -> int:
        return len(self.content.sections) if self.content else 0

    @property
    def current_section(self) -> ExplanationSection | None:
        if self.content is None:
            return None
        return self.content.sections[self.index]

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.content is not None and self.index == self.total - 1

    @property
    def position_label(self) -> str:
        return f"Leaf {self.index + 1} of {self.total}"

    def next(self) -> bool:
        if self.content is None or self.is_last:
            return False
        self.index += 1
        return True

    def previous(self) -> bool:
        if self.content is None or self.is_first:
            return False
        self.index -= 1
        return True

    def finish(self) -> bool:
        """Leave the explanation; only available on the last slide."""
        if not self.is_last:
            return False
        self.engine.finish_explanation()
        return True


# =============================================================================
# Practice
# =============================================================================


@register(LearningMode.PRACTICE)
class PracticeController(ModeController):
    """Endless single-question practice; every item is fetched fresh."""

    def __init__(self, session: LearningSession):
        super().__init__(session)
        self.item: PracticeItem | None = None
        self.requested: list[Difficulty] = []

    def requested_difficulty(self) -> Difficulty:
        # EASY exists in the content schema but is never asked for
        if self.engine.state.questions_answered > self.session.settings.hard_difficulty_after:
            return Difficulty.HARD
        return Difficulty.MEDIUM

    async def _fetch(self):
        difficulty = self.requested_difficulty()
        self.requested.append(difficulty)
        return await self.session.provider.fetch_practice(self.topic, difficulty)

    def _apply(self, content) -> None:
        self.item = content

    def _clear(self) -> None:
        self.item = None

    def answer(self, index: int) -> Feedback | None:
        question = self.item.question if self.item else None
        if not self._check_answerable(question, index):
            return None
        feedback = self.interaction.record(index, question)
        self.engine.record_practice_answer(feedback.is_correct)
        return feedback

    @property
    def feedback_label(self) -> str | None:
        if self.feedback is None:
            return None
        return "Correct Analysis" if self.feedback.is_correct else "Flawed Logic"

    async def next(self) -> bool:
        """Replace the answered item with a freshly fetched one."""
        if not self.interaction.answered or self.session.closed:
            return False
        if self.session.controller is not self:
            return False
        self.interaction.reset()
        self._clear()
        self.status = ControllerStatus.LOADING
        await self.session.reload()
        return True

    @property
    def can_verify(self) -> bool:
        return self.engine.can_enter_verification

    def verify(self) -> bool:
        """Request the mastery check; unavailable while the gate is closed."""
        if not self.can_verify:
            return False
        self.engine.enter_verification()
        return True


# =============================================================================
# Verification
# =============================================================================


@register(LearningMode.VERIFICATION)
class VerificationController(ModeController):
    """
    Three-step case study.

    A correct step waits for the learner to proceed. A wrong step shows its
    explanation and arms a timer that returns the session to practice.
    """

    def __init__(self, session: LearningSession):
        super().__init__(session)
        self.scenario: VerificationScenario | None = None
        self.index = 0
        self.restart: ScheduledTransition | None = None

    async def _fetch(self):
        return await self.session.provider.fetch_verification(self.topic)

    def _apply(self, content) -> None:
        self.scenario = content
        self.index = 0

    @property
    def current_question(self) -> Question | None:
        if self.scenario is None:
            return None
        return self.scenario.questions[self.index]

    @property
    def phase(self) -> str:
        return VERIFICATION_PHASES[self.index]

    @property
    def step_label(self) -> str:
        return f"Step {self.index + 1} of {len(VERIFICATION_PHASES)}"

    @property
    def is_last(self) -> bool:
        return self.index == len(VERIFICATION_PHASES) - 1

    @property
    def can_proceed(self) -> bool:
        return self.feedback is not None and self.feedback.is_correct

    @property
    def proceed_label(self) -> str:
        return "Finalize Verification" if self.is_last else "Proceed to Next Phase"

    @property
    def restart_pending(self) -> bool:
        return self.restart is not None and self.restart.pending

    def answer(self, index: int) -> Feedback | None:
        question = self.current_question
        if not self._check_answerable(question, index):
            return None
        feedback = self.interaction.record(index, question)
        if not feedback.is_correct:
            self._schedule_restart()
        return feedback

    def proceed(self) -> bool:
        if not self.can_proceed:
            return False
        if not self.is_last:
            self.index += 1
            self.interaction.reset()
            return True
        self.engine.complete_verification()
        return True

    def dispose(self) -> None:
        if self.restart is not None:
            self.restart.cancel()

    def _schedule_restart(self) -> None:
        ticket = self.engine.ticket()
        delay = self.session.settings.restart_delay_seconds
        logger.info(f"{self.phase} step failed; returning to practice in {delay:.1f}s")
        self.restart = ScheduledTransition(
            delay,
            lambda: self._force_restart(ticket),
            name="practice restart",
        ).start()

    def _force_restart(self, ticket: ModeTicket) -> None:
        if not self.engine.is_current(ticket):
            logger.debug("Practice restart skipped; mode already changed")
            return
        logger.warning(RESTART_NOTICE)
        self.engine.fail_verification()


# =============================================================================
# Reflection
# =============================================================================


@register(LearningMode.REFLECTION)
class ReflectionController(ModeController):
    """Free-text summary committed to finish the cycle."""

    def __init__(self, session: LearningSession):
        super().__init__(session)
        self.text = ""

    @property
    def min_chars(self) -> int:
        return self.session.settings.reflection_min_chars

    def update(self, text: str) -> None:
        self.text = text

    @property
    def can_commit(self) -> bool:
        return len(self.text) >= self.min_chars

    def commit(self) -> bool:
        if not self.can_commit:
            return False
        self.engine.commit_reflection()
        return True


# =============================================================================
# Complete
# =============================================================================


@register(LearningMode.COMPLETE)
class CompletionController(ModeController):
    """Final summary; exiting ends the session."""

    def summary(self) -> dict[str, Any]:
        state = self.engine.state
        return {
            "topic": self.topic,
            "practice_accuracy": state.practice_accuracy,
            "questions_answered": state.questions_answered,
            "diagnostic_score": state.diagnostic_score,
            "mastery": state.mastery,
        }

    def exit(self) -> None:
        self.session.close()
