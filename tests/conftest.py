"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest
from loguru import logger

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from backbench.config import Settings  # noqa: E402
from backbench.content.samples import SampleContentProvider  # noqa: E402
from backbench.core.models import Question, Topic  # noqa: E402
from backbench.core.modes import Difficulty  # noqa: E402
from backbench.engine.session import LearningSession  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (full learning sessions)")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session", autouse=True)
def debug_logging():
    """Route loguru to stderr at DEBUG so failures show the transition log."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG", format="{level: <8} | {message}")
    yield


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


# =============================================================================
# Settings & Content
# =============================================================================


@pytest.fixture
def settings():
    """Settings isolated from the environment, with a short restart delay."""
    return Settings(
        _env_file=None,
        gemini_api_key=None,
        restart_delay_seconds=0.05,
    )


@pytest.fixture
def make_question():
    """Factory for questions with a chosen correct option."""

    def _make(qid: str = "q1", correct: int = 0, options: int = 4) -> Question:
        return Question(
            id=qid,
            text=f"Question {qid}",
            options=[f"Option {i}" for i in range(options)],
            correct_index=correct,
            explanation=f"Explanation for {qid}",
        )

    return _make


@pytest.fixture
def wire_question():
    """A question as it arrives from the provider (camelCase keys)."""
    return {
        "id": "q1",
        "text": "Which layer of the OSI model handles routing?",
        "options": ["Physical", "Data Link", "Network", "Transport"],
        "correctIndex": 2,
        "explanation": "Routing is a Network Layer (Layer 3) concern.",
    }


class ScriptedProvider:
    """
    Sample content with scripted failures and gates.

    ``failures[kind]`` is raised instead of returning content; a fetch whose
    kind has an entry in ``gates`` waits for that event first.
    """

    def __init__(self):
        self.sample = SampleContentProvider()
        self.calls: list[tuple[str, Difficulty | None]] = []
        self.failures: dict[str, Exception] = {}
        self.gates: dict[str, asyncio.Event] = {}

    async def _enter(self, kind: str, difficulty: Difficulty | None = None) -> None:
        self.calls.append((kind, difficulty))
        gate = self.gates.get(kind)
        if gate is not None:
            await gate.wait()
        if kind in self.failures:
            raise self.failures[kind]

    async def fetch_diagnostic(self, topic):
        await self._enter("diagnostic")
        return await self.sample.fetch_diagnostic(topic)

    async def fetch_explanation(self, topic):
        await self._enter("explanation")
        return await self.sample.fetch_explanation(topic)

    async def fetch_practice(self, topic, difficulty):
        await self._enter("practice", difficulty)
        return await self.sample.fetch_practice(topic, difficulty)

    async def fetch_verification(self, topic):
        await self._enter("verification")
        return await self.sample.fetch_verification(topic)


@pytest.fixture
def scripted_provider():
    return ScriptedProvider()


@pytest.fixture
def make_session(settings):
    """Factory for sessions on the sample provider (or a given one)."""

    def _make(provider=None, topic: str = "Raft consensus", on_exit=None) -> LearningSession:
        return LearningSession(
            Topic.create(topic),
            provider or SampleContentProvider(),
            settings=settings,
            on_exit=on_exit,
        )

    return _make


# =============================================================================
# Session Walking
# =============================================================================

# Correct options of the sample content
DIAGNOSTIC_ANSWERS = (0, 1, 2)
PRACTICE_ANSWER = 1
VERIFICATION_ANSWERS = (1, 2, 0)


class SessionWalker:
    """Drives a started session forward with the sample content's answers."""

    @staticmethod
    async def to_explanation(session: LearningSession, answers=DIAGNOSTIC_ANSWERS) -> None:
        await session.settle()
        for answer in answers:
            session.controller.answer(answer)
            session.controller.proceed()
        await session.settle()

    @classmethod
    async def to_practice(cls, session: LearningSession) -> None:
        await cls.to_explanation(session)
        ctl = session.controller
        while ctl.next():
            pass
        ctl.finish()
        await session.settle()

    @classmethod
    async def to_verification(cls, session: LearningSession) -> None:
        await cls.to_practice(session)
        session.controller.verify()
        await session.settle()

    @classmethod
    async def to_reflection(cls, session: LearningSession) -> None:
        await cls.to_verification(session)
        for answer in VERIFICATION_ANSWERS:
            session.controller.answer(answer)
            session.controller.proceed()
        await session.settle()

    @classmethod
    async def to_complete(cls, session: LearningSession) -> None:
        await cls.to_reflection(session)
        session.controller.update("Leader election bounds split votes with randomized timeouts.")
        session.controller.commit()
        await session.settle()


@pytest.fixture
def walk():
    return SessionWalker
