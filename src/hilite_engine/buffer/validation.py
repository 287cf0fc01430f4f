"""Validation helpers shared by buffer hosts."""

from __future__ import annotations

from .host import Selection


class SelectionError(RuntimeError):
    """Raised when a host is asked to select offsets outside its text."""

    def __init__(self, message: str, *, selection: Selection | None = None) -> None:
        super().__init__(message)
        self.selection = selection


def ensure_selection(text: str, start: int, end: int) -> Selection:
    if start < 0 or end < 0:
        raise SelectionError("Selection offsets cannot be negative", selection=(start, end))
    if start > len(text) or end > len(text):
        raise SelectionError("Selection past end of text", selection=(start, end))
    return (start, end)


def clamp_offset(offset: int, length: int) -> int:
    return max(0, min(offset, length))
