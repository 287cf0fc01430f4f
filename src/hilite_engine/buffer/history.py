"""Snapshot-based undo/redo for a host buffer."""

from __future__ import annotations

from collections import deque
from contextlib import contextmanager
from enum import Enum
from typing import Deque, Iterator, Optional

from hilite_engine.runtime import telemetry

from .host import BufferHost, ChangeEvent, ChangePhase
from .validation import clamp_offset

DEFAULT_MAX_STACK_SIZE = 200
LOGGER_NAME = "hilite_engine.history"


class MutationState(str, Enum):
    """Who is changing the buffer right now."""

    IDLE = "idle"
    PROGRAMMATIC = "programmatic"


class HistoryManager:
    """Records full-text snapshots off the host's change notifications.

    The top of the undo stack always mirrors the buffer's current text and
    its bottom is the state at attach time (or the last ``clear_history``),
    so ``undo`` can never step past it. Changes the manager makes itself
    happen in ``MutationState.PROGRAMMATIC`` and are not recorded.
    """

    def __init__(
        self, host: BufferHost, *, max_stack_size: int = DEFAULT_MAX_STACK_SIZE
    ) -> None:
        if max_stack_size < 1:
            raise ValueError("max_stack_size must be at least 1")
        self.host = host
        self.max_stack_size = max_stack_size
        self._undo: Deque[str] = deque(maxlen=max_stack_size)
        self._redo: Deque[str] = deque(maxlen=max_stack_size)
        self._state = MutationState.IDLE
        self._attached = False

    @property
    def state(self) -> MutationState:
        return self._state

    @property
    def is_attached(self) -> bool:
        return self._attached

    @property
    def undo_depth(self) -> int:
        """Number of earlier states ``undo`` can still reach."""

        return max(0, len(self._undo) - 1)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def can_undo(self) -> bool:
        return len(self._undo) > 1

    def can_redo(self) -> bool:
        return bool(self._redo)

    def attach(self) -> None:
        if self._attached:
            return
        self.host.add_change_listener(self.handle_change)
        self._attached = True
        self.clear_history()
        telemetry.record_event(
            "history.attach",
            data={"limit": self.max_stack_size},
            logger_name=LOGGER_NAME,
        )

    def detach(self) -> None:
        if not self._attached:
            return
        self.host.remove_change_listener(self.handle_change)
        self._attached = False
        self._undo.clear()
        self._redo.clear()
        telemetry.record_event("history.detach", logger_name=LOGGER_NAME)

    def handle_change(self, event: ChangeEvent) -> None:
        if event.phase is ChangePhase.BEFORE:
            self.on_before_change(event.text)
        else:
            self.on_after_change(event.text)

    def on_before_change(self, current_text: str) -> None:
        """Record the pre-edit text and invalidate redo."""

        if self._state is MutationState.PROGRAMMATIC:
            return
        if not self._undo or self._undo[-1] != current_text:
            self._push_undo(current_text)
        self._redo.clear()

    def on_after_change(self, new_text: str) -> None:
        if self._state is MutationState.PROGRAMMATIC:
            return
        if self._undo and self._undo[-1] == new_text:
            return
        self._push_undo(new_text)

    def undo(self) -> bool:
        """Step back one snapshot; ``False`` if none is left or the host fails."""

        if not self.can_undo():
            return False
        if not self._restore(self._undo[-2], action="undo"):
            return False
        self._redo.append(self._undo.pop())
        return True

    def redo(self) -> bool:
        if not self.can_redo():
            return False
        if not self._restore(self._redo[-1], action="redo"):
            return False
        self._undo.append(self._redo.pop())
        return True

    def clear_history(self) -> None:
        """Forget everything; the current text becomes the only undo entry."""

        self._undo.clear()
        self._redo.clear()
        self._undo.append(self.host.get_text())

    def _push_undo(self, text: str) -> None:
        evicted: Optional[str] = None
        if len(self._undo) == self.max_stack_size:
            evicted = self._undo[0]
        self._undo.append(text)
        if evicted is not None:
            telemetry.record_event(
                "history.evict",
                level="debug",
                data={"limit": self.max_stack_size, "evicted_length": len(evicted)},
                logger_name=LOGGER_NAME,
            )

    @contextmanager
    def _programmatic(self) -> Iterator[None]:
        self._state = MutationState.PROGRAMMATIC
        try:
            yield
        finally:
            self._state = MutationState.IDLE

    def _restore(self, text: str, *, action: str) -> bool:
        """Write ``text`` into the host; stacks are only moved on success."""

        try:
            with telemetry.span(
                f"history::{action}",
                logger_name=LOGGER_NAME,
                component="history",
                metadata={
                    "undo_depth": self.undo_depth,
                    "redo_depth": self.redo_depth,
                },
            ) as handle:
                with self._programmatic():
                    self.host.set_text(text)
                try:
                    current = self.host.get_text()
                    caret = clamp_offset(len(text), len(current))
                    self.host.set_selection(caret, caret)
                except Exception as exc:
                    # The text is already restored; a lost caret is not a failure.
                    handle.add_metadata("caret_error", repr(exc))
        except Exception as exc:
            telemetry.record_event(
                "history.failed",
                level="error",
                data={"action": action, "error": repr(exc)},
                logger_name=LOGGER_NAME,
            )
            return False
        return True


__all__ = ["DEFAULT_MAX_STACK_SIZE", "HistoryManager", "MutationState"]
