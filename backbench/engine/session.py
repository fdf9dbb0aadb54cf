"""
Learning Session: the shell around one topic's learning cycle.

Owns the state machine and the active mode controller. When the engine
changes mode the session disposes of the old controller (cancelling its
timers and any outstanding fetch), builds the controller for the new mode
and schedules its content load on the running event loop.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from loguru import logger

from backbench.config import Settings, get_settings
from backbench.content.provider import ContentProvider
from backbench.core.models import Topic
from backbench.core.modes import LearningMode, MasteryLevel

from .controllers import ModeController, build_controller
from .state import LearningEngine, SessionState


class LearningSession:
    """
    Orchestrator for one learning cycle.

    Must be driven from inside a running asyncio event loop: mode changes
    schedule content loads as tasks. ``settle()`` waits for them.
    """

    def __init__(
        self,
        topic: Topic,
        provider: ContentProvider,
        settings: Settings | None = None,
        on_exit: Callable[[], None] | None = None,
    ):
        self.topic = topic
        self.provider = provider
        self.settings = settings or get_settings()
        self.closed = False
        self._on_exit = on_exit
        self._load_task: asyncio.Task | None = None

        self.engine = LearningEngine(gate_accuracy=self.settings.verification_gate_accuracy)
        self.engine.on_transition(self._on_transition)
        self.controller: ModeController = build_controller(self.engine.mode, self)

    # =========================================================================
    # Shell state
    # =========================================================================

    @property
    def state(self) -> SessionState:
        return self.engine.state

    @property
    def mode(self) -> LearningMode:
        return self.engine.mode

    @property
    def mastery(self) -> MasteryLevel:
        return self.engine.mastery

    @property
    def progress_percent(self) -> int:
        return self.engine.mode.progress_percent

    @property
    def loading(self) -> bool:
        return self._load_task is not None and not self._load_task.done()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def start(self) -> None:
        """Load content for the opening mode."""
        logger.info(f"Starting learning cycle for {self.topic.query!r}")
        self._schedule_load()
        await self.settle()

    async def settle(self) -> None:
        """Wait until the active controller has finished loading."""
        while self._load_task is not None and not self._load_task.done():
            task = self._load_task
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                # Superseded by a mode change; wait for its replacement
                if not task.cancelled():
                    raise

    async def reload(self) -> None:
        """Fetch fresh content for the active controller and wait for it."""
        if self.closed:
            return
        self._cancel_load()
        self._schedule_load()
        await self.settle()

    def close(self) -> None:
        """End the session. Pending timers and fetches never fire afterwards."""
        if self.closed:
            return
        self.closed = True
        self.controller.dispose()
        self._cancel_load()
        logger.info(f"Closed learning session for {self.topic.query!r}")
        if self._on_exit is not None:
            self._on_exit()

    exit = close

    # =========================================================================
    # Internals
    # =========================================================================

    def _on_transition(self, old: LearningMode, new: LearningMode) -> None:
        self.controller.dispose()
        self._cancel_load()
        self.controller = build_controller(new, self)
        if not self.closed:
            self._schedule_load()

    def _schedule_load(self) -> None:
        loop = asyncio.get_running_loop()
        controller = self.controller
        self._load_task = loop.create_task(
            controller.load(), name=f"load-{controller.mode.value.lower()}"
        )

    def _cancel_load(self) -> None:
        if self._load_task is not None and not self._load_task.done():
            self._load_task.cancel()
