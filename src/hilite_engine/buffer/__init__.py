"""Host buffer interface, in-memory buffer, and undo/redo history."""

from .history import DEFAULT_MAX_STACK_SIZE, HistoryManager, MutationState
from .host import (
    BufferHost,
    ChangeEvent,
    ChangeListener,
    ChangeNotifier,
    ChangePhase,
    Decoration,
    DecorationLayer,
    Selection,
)
from .stats import BufferStats, compute_stats
from .text_buffer import TextBuffer
from .validation import SelectionError, clamp_offset, ensure_selection

__all__ = [
    "BufferHost",
    "BufferStats",
    "ChangeEvent",
    "ChangeListener",
    "ChangeNotifier",
    "ChangePhase",
    "DEFAULT_MAX_STACK_SIZE",
    "Decoration",
    "DecorationLayer",
    "HistoryManager",
    "MutationState",
    "Selection",
    "SelectionError",
    "TextBuffer",
    "clamp_offset",
    "compute_stats",
    "ensure_selection",
]
