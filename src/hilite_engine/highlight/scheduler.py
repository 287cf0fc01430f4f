"""Debounce change notifications into single highlight passes."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from hilite_engine.runtime import telemetry

DEFAULT_QUIET_MS = 120
LOGGER_NAME = "hilite_engine.highlight"

Clock = Callable[[], float]


class SchedulerState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    RUNNING = "running"


@dataclass
class PendingTimer:
    deadline: float
    generation: int


class HighlightScheduler:
    """One-shot, reschedulable timer driving ``callback``.

    The host polls ``process_timeouts`` from its event loop. Each
    ``notify`` pushes the deadline out and bumps the generation, so a burst
    of notifications collapses into one callback once the buffer has been
    quiet for ``quiet_ms``.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        *,
        quiet_ms: int = DEFAULT_QUIET_MS,
        clock: Clock = time.monotonic,
    ) -> None:
        if quiet_ms < 0:
            raise ValueError("quiet_ms cannot be negative")
        self._callback = callback
        self.quiet_ms = quiet_ms
        self._clock = clock
        self._pending: Optional[PendingTimer] = None
        self._generation = 0
        self._running = False
        self.fired = 0
        self.suppressed = 0

    @property
    def state(self) -> SchedulerState:
        if self._running:
            return SchedulerState.RUNNING
        if self._pending is not None:
            return SchedulerState.PENDING
        return SchedulerState.IDLE

    @property
    def generation(self) -> int:
        return self._generation

    def notify(self) -> None:
        if self._running:
            # Painting only touches decorations, so nothing should get here.
            self.suppressed += 1
            telemetry.record_event(
                "scheduler.suppressed",
                level="debug",
                data={"count": self.suppressed},
                logger_name=LOGGER_NAME,
            )
            return
        self._generation += 1
        self._pending = PendingTimer(
            deadline=self._clock() + self.quiet_ms / 1000.0,
            generation=self._generation,
        )

    def cancel(self) -> None:
        self._pending = None

    def process_timeouts(self) -> bool:
        """Fire the callback if the pending deadline has passed."""

        timer = self._pending
        if timer is None or timer.deadline > self._clock():
            return False
        return self._fire(timer.generation)

    def flush(self) -> bool:
        """Fire immediately if a pass is pending."""

        timer = self._pending
        if timer is None:
            return False
        return self._fire(timer.generation)

    def _fire(self, generation: int) -> bool:
        timer = self._pending
        if timer is None or timer.generation != generation:
            return False
        self._pending = None
        self._running = True
        try:
            self._callback()
        finally:
            self._running = False
        self.fired += 1
        return True


__all__ = ["DEFAULT_QUIET_MS", "HighlightScheduler", "PendingTimer", "SchedulerState"]
