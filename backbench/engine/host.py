"""
Host application: switches between topic entry and a learning session.

Each submitted topic gets a brand-new session; nothing carries over from a
previous one.
"""

from __future__ import annotations

from loguru import logger

from backbench.config import Settings, get_settings
from backbench.content.provider import ContentProvider
from backbench.core.models import Topic
from backbench.core.modes import AppState

from .session import LearningSession


class LearningApp:
    """Top-level mode switch between HOME and LEARNING_ENGINE."""

    def __init__(self, provider: ContentProvider, settings: Settings | None = None):
        self.provider = provider
        self.settings = settings or get_settings()
        self.state = AppState.HOME
        self.session: LearningSession | None = None

    @property
    def topic(self) -> Topic | None:
        return self.session.topic if self.session else None

    def initiate(self, raw_topic: str) -> LearningSession:
        """
        Start a learning cycle for a topic.

        Raises:
            ValueError: If the topic is blank
        """
        topic = Topic.create(raw_topic)
        if self.session is not None:
            self.session.close()

        self.session = LearningSession(
            topic,
            self.provider,
            settings=self.settings,
            on_exit=self.return_home,
        )
        self.state = AppState.LEARNING_ENGINE
        logger.debug(f"Initiated cycle for {topic.query!r} at {topic.timestamp}")
        return self.session

    def return_home(self) -> None:
        """Destroy the current session and go back to topic entry."""
        session, self.session = self.session, None
        self.state = AppState.HOME
        if session is not None and not session.closed:
            session.close()
