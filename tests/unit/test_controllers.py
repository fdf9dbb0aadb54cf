"""
Unit tests for the per-mode controllers, driven through a session on the
sample provider.
"""

import asyncio

import pytest

from backbench.content.provider import ContentFetchError
from backbench.core.modes import Difficulty, LearningMode, MasteryLevel
from backbench.engine.controllers import (
    CONTROLLERS,
    CompletionController,
    ControllerStatus,
    DiagnosticController,
    ExplanationController,
    PracticeController,
    ReflectionController,
    VerificationController,
)


def test_every_mode_has_a_controller():
    assert set(CONTROLLERS) == set(LearningMode)


# =============================================================================
# Diagnostic
# =============================================================================


class TestDiagnosticController:
    @pytest.mark.asyncio
    async def test_loads_three_questions(self, make_session):
        session = make_session()
        ctl = session.controller
        assert isinstance(ctl, DiagnosticController)
        assert ctl.status == ControllerStatus.LOADING

        await session.start()

        assert ctl.ready
        assert len(ctl.questions) == 3
        assert ctl.current_question.id == "1"

    @pytest.mark.asyncio
    async def test_scores_correct_answers(self, make_session):
        session = make_session()
        await session.start()
        ctl = session.controller

        for answer in (0, 0, 2):  # correct, wrong, correct
            ctl.answer(answer)
            ctl.proceed()
        await session.settle()

        assert session.mode == LearningMode.EXPLANATION
        assert session.state.diagnostic_score == 2

    @pytest.mark.asyncio
    async def test_one_attempt_per_question(self, make_session):
        session = make_session()
        await session.start()
        ctl = session.controller

        first = ctl.answer(1)
        second = ctl.answer(0)

        assert not first.is_correct
        assert second is None
        assert ctl.interaction.selected_option == 1
        assert ctl.score == 0

    @pytest.mark.asyncio
    async def test_proceed_requires_answer(self, make_session):
        session = make_session()
        await session.start()
        ctl = session.controller

        assert not ctl.proceed()
        ctl.answer(0)
        assert ctl.proceed()
        assert ctl.index == 1
        assert ctl.feedback is None

    @pytest.mark.asyncio
    async def test_invalid_option_raises(self, make_session):
        session = make_session()
        await session.start()

        with pytest.raises(ValueError):
            session.controller.answer(4)

    @pytest.mark.asyncio
    async def test_no_answers_while_loading(self, make_session, scripted_provider):
        scripted_provider.gates["diagnostic"] = asyncio.Event()
        session = make_session(scripted_provider)
        starting = asyncio.create_task(session.start())
        await asyncio.sleep(0)

        assert session.loading
        assert session.controller.status == ControllerStatus.LOADING
        assert session.controller.answer(0) is None

        scripted_provider.gates["diagnostic"].set()
        await starting
        assert session.controller.ready


# =============================================================================
# Explanation
# =============================================================================


class TestExplanationController:
    @pytest.mark.asyncio
    async def test_walks_all_sections(self, make_session, walk):
        session = make_session()
        await session.start()
        await walk.to_explanation(session)
        ctl = session.controller
        assert isinstance(ctl, ExplanationController)

        assert ctl.total == 8
        assert ctl.position_label == "Leaf 1 of 8"
        assert not ctl.previous()
        assert not ctl.finish()

        moves = 0
        while ctl.next():
            moves += 1

        assert moves == 7
        assert ctl.is_last
        assert ctl.position_label == "Leaf 8 of 8"

    @pytest.mark.asyncio
    async def test_previous_and_finish(self, make_session, walk):
        session = make_session()
        await session.start()
        await walk.to_explanation(session)
        ctl = session.controller

        ctl.next()
        ctl.next()
        assert ctl.previous()
        assert ctl.index == 1

        while ctl.next():
            pass
        assert ctl.finish()
        await session.settle()

        assert session.mode == LearningMode.PRACTICE
        assert session.mastery == MasteryLevel.FOUNDATION


# =============================================================================
# Practice
# =============================================================================


class TestPracticeController:
    @pytest.mark.asyncio
    async def test_starts_at_medium(self, make_session, walk):
        session = make_session()
        await session.start()
        await walk.to_practice(session)
        ctl = session.controller

        assert isinstance(ctl, PracticeController)
        assert ctl.requested == [Difficulty.MEDIUM]
        assert ctl.item.difficulty == Difficulty.MEDIUM

    @pytest.mark.asyncio
    async def test_feedback_labels(self, make_session, walk):
        session = make_session()
        await session.start()
        await walk.to_practice(session)
        ctl = session.controller

        ctl.answer(1)
        assert ctl.feedback_label == "Correct Analysis"
        await ctl.next()
        ctl.answer(0)
        assert ctl.feedback_label == "Flawed Logic"
        assert session.state.practice_accuracy == 50

    @pytest.mark.asyncio
    async def test_next_replaces_item(self, make_session, walk):
        session = make_session()
        await session.start()
        await walk.to_practice(session)
        ctl = session.controller

        assert not await ctl.next()
        first = ctl.item.question.id

        ctl.answer(1)
        assert await ctl.next()

        assert ctl.item.question.id != first
        assert ctl.feedback is None
        assert session.mode == LearningMode.PRACTICE

    @pytest.mark.asyncio
    async def test_switches_to_hard_after_threshold(self, make_session, walk):
        session = make_session()
        await session.start()
        await walk.to_practice(session)
        ctl = session.controller

        for _ in range(6):
            ctl.answer(1)
            await ctl.next()

        assert session.state.questions_answered == 6
        assert ctl.requested[5] == Difficulty.MEDIUM
        assert ctl.requested[6] == Difficulty.HARD
        assert ctl.item.difficulty == Difficulty.HARD

    @pytest.mark.asyncio
    async def test_verify_disabled_below_gate(self, make_session, walk):
        session = make_session()
        await session.start()
        await walk.to_practice(session)
        ctl = session.controller

        ctl.answer(0)

        assert not ctl.can_verify
        assert not ctl.verify()
        assert session.mode == LearningMode.PRACTICE

    @pytest.mark.asyncio
    async def test_verify_before_any_answer(self, make_session, walk):
        session = make_session()
        await session.start()
        await walk.to_practice(session)

        assert session.controller.verify()
        await session.settle()
        assert session.mode == LearningMode.VERIFICATION


# =============================================================================
# Verification
# =============================================================================


class TestVerificationController:
    @pytest.mark.asyncio
    async def test_phases_and_labels(self, make_session, walk):
        session = make_session()
        await session.start()
        await walk.to_verification(session)
        ctl = session.controller
        assert isinstance(ctl, VerificationController)

        assert ctl.phase == "Diagnosis"
        assert ctl.step_label == "Step 1 of 3"
        assert ctl.proceed_label == "Proceed to Next Phase"
        assert not ctl.can_proceed

        ctl.answer(1)
        assert ctl.can_proceed
        ctl.proceed()
        assert ctl.phase == "Implementation"

        ctl.answer(2)
        ctl.proceed()
        assert ctl.phase == "Consequence"
        assert ctl.is_last
        assert ctl.proceed_label == "Finalize Verification"

        ctl.answer(0)
        ctl.proceed()
        await session.settle()

        assert session.mode == LearningMode.REFLECTION
        assert session.mastery == MasteryLevel.PROFICIENT

    @pytest.mark.asyncio
    async def test_wrong_answer_schedules_restart(self, make_session, walk):
        session = make_session()
        await session.start()
        await walk.to_verification(session)
        ctl = session.controller

        feedback = ctl.answer(0)

        assert not feedback.is_correct
        assert feedback.text == "Diagnosis explanation."
        assert ctl.restart_pending
        assert not ctl.proceed()
        assert session.mode == LearningMode.VERIFICATION

        await ctl.restart.wait()
        await session.settle()

        assert session.mode == LearningMode.PRACTICE
        assert session.mastery == MasteryLevel.FOUNDATION
        assert isinstance(session.controller, PracticeController)
        assert session.controller.ready

    @pytest.mark.asyncio
    async def test_stale_restart_ignored(self, make_session, walk):
        session = make_session()
        await session.start()
        await walk.to_verification(session)
        ctl = session.controller
        stale = session.engine.ticket()

        ctl.answer(1)
        ctl.proceed()
        ctl.answer(2)
        ctl.proceed()
        ctl.answer(0)
        ctl.proceed()

        ctl._force_restart(stale)

        assert session.mode == LearningMode.REFLECTION


# =============================================================================
# Reflection & Completion
# =============================================================================


class TestReflectionController:
    @pytest.mark.asyncio
    async def test_commit_needs_minimum_length(self, make_session, walk):
        session = make_session()
        await session.start()
        await walk.to_reflection(session)
        ctl = session.controller
        assert isinstance(ctl, ReflectionController)
        assert ctl.ready

        ctl.update("too short")
        assert not ctl.can_commit
        assert not ctl.commit()

        ctl.update("x" * 20)
        assert ctl.can_commit
        assert ctl.commit()
        await session.settle()

        assert session.mode == LearningMode.COMPLETE
        assert session.mastery == MasteryLevel.MASTER

    @pytest.mark.asyncio
    async def test_nineteen_characters_not_enough(self, make_session, walk):
        session = make_session()
        await session.start()
        await walk.to_reflection(session)

        session.controller.update("y" * 19)
        assert not session.controller.commit()


class TestCompletionController:
    @pytest.mark.asyncio
    async def test_summary_and_exit(self, make_session, walk):
        exits = []
        session = make_session(on_exit=lambda: exits.append(True))
        await session.start()
        await walk.to_complete(session)
        ctl = session.controller
        assert isinstance(ctl, CompletionController)

        summary = ctl.summary()
        assert summary["topic"] == "Raft consensus"
        assert summary["diagnostic_score"] == 3
        assert summary["mastery"] == MasteryLevel.MASTER
        assert summary["questions_answered"] == 0

        ctl.exit()

        assert session.closed
        assert exits == [True]


# =============================================================================
# Failures
# =============================================================================


@pytest.mark.asyncio
async def test_fetch_failure_stalls(make_session, scripted_provider):
    error = ContentFetchError("quota exceeded")
    scripted_provider.failures["diagnostic"] = error
    session = make_session(scripted_provider)

    await session.start()
    ctl = session.controller

    assert ctl.status == ControllerStatus.STALLED
    assert ctl.error is error
    assert ctl.questions == []
    assert ctl.answer(0) is None
    assert not ctl.proceed()
    assert session.mode == LearningMode.DIAGNOSTIC


@pytest.mark.asyncio
async def test_content_arriving_after_close_is_dropped(make_session, scripted_provider):
    gate = asyncio.Event()
    scripted_provider.gates["diagnostic"] = gate
    session = make_session(scripted_provider)
    ctl = session.controller
    loading = asyncio.create_task(ctl.load())
    await asyncio.sleep(0)

    session.close()
    gate.set()
    await loading

    assert ctl.questions == []
    assert ctl.status == ControllerStatus.LOADING
    assert session.mode == LearningMode.DIAGNOSTIC
