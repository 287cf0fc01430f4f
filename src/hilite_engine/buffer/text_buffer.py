"""In-memory buffer host used headless and in tests."""

from __future__ import annotations

from typing import List, Optional

from .host import ChangeNotifier, ChangePhase, Decoration, DecorationLayer, Selection
from .validation import clamp_offset, ensure_selection


class TextBuffer(ChangeNotifier):
    """Plain string buffer implementing ``BufferHost``.

    Selections may be reversed (``start > end``) to model a caret anchored
    at the end, as text widgets allow.
    """

    def __init__(self, text: str = "", *, name: str = "default") -> None:
        super().__init__()
        self.name = name
        self._text = text
        self._selection: Selection = (len(text), len(text))
        self.decorations = DecorationLayer()

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._apply(text, caret=len(text))

    def get_selection(self) -> Selection:
        return self._selection

    def set_selection(self, start: int, end: int) -> None:
        self._selection = ensure_selection(self._text, start, end)

    def add_decoration(self, start: int, end: int, color: str, *, tag: str) -> None:
        self.decorations.add(start, end, color, tag)

    def remove_decorations(self, tag: str) -> None:
        self.decorations.remove_tag(tag)

    # Editing helpers mirroring what a user can do in a widget.

    def replace_range(self, start: int, end: int, text: str) -> None:
        length = len(self._text)
        start, end = sorted((clamp_offset(start, length), clamp_offset(end, length)))
        updated = self._text[:start] + text + self._text[end:]
        self._apply(updated, caret=start + len(text))

    def insert(self, text: str, *, at: Optional[int] = None) -> None:
        position = self._selection[1] if at is None else at
        self.replace_range(position, position, text)

    def append(self, text: str) -> None:
        self.insert(text, at=len(self._text))

    def delete(self, start: int, end: int) -> None:
        self.replace_range(start, end, "")

    def type_text(self, text: str) -> None:
        """Insert ``text`` one character at a time, one mutation per keystroke."""

        for char in text:
            self.insert(char)

    def decorations_for(self, tag: str) -> List[Decoration]:
        return self.decorations.tagged(tag)

    def color_at(self, offset: int) -> Optional[str]:
        return self.decorations.color_at(offset)

    def _apply(self, text: str, *, caret: int) -> None:
        self._notify(ChangePhase.BEFORE, self._text)
        self._text = text
        # Stale decorations are clipped the way widgets shrink spans on delete.
        self._clip_decorations()
        caret = clamp_offset(caret, len(text))
        self._selection = (caret, caret)
        self._notify(ChangePhase.AFTER, self._text)

    def _clip_decorations(self) -> None:
        length = len(self._text)
        survivors = [
            item for item in self.decorations if item.start < length
        ]
        if len(survivors) == len(self.decorations) and all(
            item.end <= length for item in survivors
        ):
            return
        layer = DecorationLayer()
        for item in survivors:
            layer.add(item.start, min(item.end, length), item.color, item.tag)
        self.decorations = layer


__all__ = ["TextBuffer"]
