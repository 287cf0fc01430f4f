from __future__ import annotations

from typing import List

import pytest

from hilite_engine.buffer import (
    ChangeEvent,
    ChangePhase,
    HistoryManager,
    MutationState,
    TextBuffer,
)


def make_history(
    text: str = "A", *, max_stack_size: int = 200
) -> tuple[TextBuffer, HistoryManager]:
    buffer = TextBuffer(text)
    history = HistoryManager(buffer, max_stack_size=max_stack_size)
    history.attach()
    return buffer, history


def test_undo_redo_round_trip() -> None:
    buffer, history = make_history("A")
    buffer.append("B")
    buffer.append("C")

    assert history.undo() is True
    assert buffer.get_text() == "AB"
    assert history.undo() is True
    assert buffer.get_text() == "A"
    assert history.undo() is False
    assert buffer.get_text() == "A"

    assert history.redo() is True
    assert buffer.get_text() == "AB"
    assert history.redo() is True
    assert buffer.get_text() == "ABC"
    assert history.redo() is False


def test_edit_after_undo_clears_redo() -> None:
    buffer, history = make_history("A")
    buffer.append("B")
    buffer.append("C")
    history.undo()
    assert history.can_redo()

    buffer.append("X")

    assert history.can_redo() is False
    assert history.redo_depth == 0
    assert buffer.get_text() == "ABX"
    history.undo()
    assert buffer.get_text() == "AB"


def test_bounded_stack_evicts_oldest_snapshots() -> None:
    buffer, history = make_history("s0", max_stack_size=3)
    for index in range(1, 6):
        buffer.set_text(f"s{index}")

    assert history.undo_depth + 1 == 3

    results = [history.undo() for _ in range(3)]

    assert results == [True, True, False]
    assert buffer.get_text() == "s3"


def test_restores_are_not_recorded_as_edits() -> None:
    buffer, history = make_history("A")
    buffer.append("B")
    depth_before = history.undo_depth

    history.undo()

    assert history.undo_depth == depth_before - 1
    assert history.redo_depth == 1
    assert history.state is MutationState.IDLE


def test_guard_is_programmatic_while_restoring() -> None:
    buffer, history = make_history("A")
    buffer.append("B")
    seen: List[tuple[ChangePhase, MutationState]] = []

    def probe(event: ChangeEvent) -> None:
        seen.append((event.phase, history.state))

    buffer.add_change_listener(probe)
    history.undo()

    assert seen == [
        (ChangePhase.BEFORE, MutationState.PROGRAMMATIC),
        (ChangePhase.AFTER, MutationState.PROGRAMMATIC),
    ]


def test_caret_moves_to_end_of_restored_text() -> None:
    buffer, history = make_history("hello")
    buffer.append(" world")
    buffer.set_selection(0, 2)

    history.undo()

    assert buffer.get_selection() == (5, 5)


def test_clear_history_reseeds_with_current_text() -> None:
    buffer, history = make_history("A")
    buffer.append("B")
    history.undo()

    history.clear_history()

    assert history.can_undo() is False
    assert history.can_redo() is False
    assert history.undo() is False
    assert buffer.get_text() == "A"


def test_empty_history_is_a_no_op() -> None:
    buffer, history = make_history("A")

    assert history.undo() is False
    assert history.redo() is False
    assert buffer.get_text() == "A"


def test_detach_stops_recording() -> None:
    buffer, history = make_history("A")
    history.detach()
    buffer.append("B")

    assert buffer.listener_count == 0
    assert history.is_attached is False
    assert history.undo() is False
    assert buffer.get_text() == "AB"


def test_edits_made_outside_notifications_are_still_undoable() -> None:
    buffer, history = make_history("A")

    history.on_before_change("A-side")
    history.on_after_change("A-side!")

    assert history.undo_depth == 2


def test_stack_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        HistoryManager(TextBuffer(), max_stack_size=0)


class FlakyBuffer(TextBuffer):
    def __init__(self, text: str = "") -> None:
        super().__init__(text)
        self.broken = False

    def set_text(self, text: str) -> None:
        if self.broken:
            raise RuntimeError("widget gone")
        super().set_text(text)


def test_host_failure_during_undo_keeps_history_in_step() -> None:
    buffer = FlakyBuffer("A")
    history = HistoryManager(buffer)
    history.attach()
    buffer.append("B")
    buffer.broken = True

    assert history.undo() is False
    assert buffer.get_text() == "AB"
    assert (history.undo_depth, history.redo_depth) == (1, 0)
    assert history.state is MutationState.IDLE

    buffer.broken = False
    assert history.undo() is True
    assert buffer.get_text() == "A"


def test_host_failure_during_redo_keeps_redo_entry() -> None:
    buffer = FlakyBuffer("A")
    history = HistoryManager(buffer)
    history.attach()
    buffer.append("B")
    history.undo()
    buffer.broken = True

    assert history.redo() is False
    assert buffer.get_text() == "A"
    assert (history.undo_depth, history.redo_depth) == (0, 1)

    buffer.broken = False
    assert history.redo() is True
    assert buffer.get_text() == "AB"


def test_redo_stack_stays_within_bound() -> None:
    buffer, history = make_history("s0", max_stack_size=3)
    for index in range(1, 6):
        buffer.set_text(f"s{index}")

    while history.undo():
        pass

    assert buffer.get_text() == "s3"
    assert history.redo_depth == 2
    assert [history.redo() for _ in range(3)] == [True, True, False]
    assert buffer.get_text() == "s5"
    assert history.redo_depth == 0
