"""Tokenizer, overlay painting, debounce scheduling, and the highlighter."""

from .highlighter import Highlighter, attached_highlighter
from .overlay import DEFAULT_COLORS, ENGINE_TAG, OverlayManager, Palette
from .scheduler import DEFAULT_QUIET_MS, HighlightScheduler, PendingTimer, SchedulerState
from .tokenizer import (
    CategoryPattern,
    Span,
    Tokenizer,
    category_at,
    compile_rules,
    resolve_runs,
    tokenize,
)

__all__ = [
    "CategoryPattern",
    "DEFAULT_COLORS",
    "DEFAULT_QUIET_MS",
    "ENGINE_TAG",
    "HighlightScheduler",
    "Highlighter",
    "OverlayManager",
    "Palette",
    "PendingTimer",
    "SchedulerState",
    "Span",
    "Tokenizer",
    "attached_highlighter",
    "category_at",
    "compile_rules",
    "resolve_runs",
    "tokenize",
]
