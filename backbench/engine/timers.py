"""
Cancellable delayed transitions.

A ``ScheduledTransition`` runs a callback once after a delay on the running
event loop, unless it is cancelled first. Sessions use it for the forced
return to practice after a failed verification step.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from loguru import logger


class ScheduledTransition:
    """A one-shot timer tied to the lifetime of whoever owns it."""

    def __init__(self, delay: float, callback: Callable[[], None], name: str = "transition"):
        self.delay = delay
        self.callback = callback
        self.name = name
        self.fired = False
        self._task: asyncio.Task | None = None

    def start(self) -> ScheduledTransition:
        """Arm the timer. Must be called from inside a running event loop."""
        if self._task is not None:
            raise RuntimeError(f"{self.name} already started")
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(), name=f"scheduled-{self.name}")
        logger.debug(f"Scheduled {self.name} in {self.delay:.1f}s")
        return self

    async def _run(self) -> None:
        await asyncio.sleep(self.delay)
        self.fired = True
        logger.info(f"Scheduled {self.name} fired")
        self.callback()

    @property
    def pending(self) -> bool:
        """Armed and neither fired nor cancelled."""
        return self._task is not None and not self._task.done() and not self.fired

    @property
    def cancelled(self) -> bool:
        return self._task is not None and self._task.cancelled() and not self.fired

    def cancel(self) -> None:
        """Stop the timer if it has not fired yet. Safe to call repeatedly."""
        if self.pending:
            self._task.cancel()
            logger.debug(f"Cancelled scheduled {self.name}")

    async def wait(self) -> None:
        """Wait until the timer has fired or been cancelled."""
        if self._task is None:
            return
        try:
            await asyncio.shield(self._task)
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise
