"""Buffer host backed by a Textual ``TextArea``-style widget."""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Tuple

from rich.text import Text

from hilite_engine.buffer.host import (
    ChangeNotifier,
    ChangePhase,
    DecorationLayer,
    Selection,
)
from hilite_engine.buffer.validation import clamp_offset, ensure_selection

Location = Tuple[int, int]  # (row, column)
ChangeHook = Callable[[ChangePhase, str], None]


class EditorWidget(Protocol):
    """The slice of ``TextArea`` the host relies on."""

    change_hook: Optional[ChangeHook]

    @property
    def text(self) -> str:
        ...

    @property
    def selection(self) -> Any:
        ...

    def load_text(self, text: str) -> None:
        ...

    def select_locations(self, start: Location, end: Location) -> None:
        ...


def location_to_offset(text: str, location: Location) -> int:
    lines = text.split("\n")
    row, col = location
    row = max(0, min(row, len(lines) - 1))
    offset = sum(len(line) + 1 for line in lines[:row])
    return offset + max(0, min(col, len(lines[row])))


def offset_to_location(text: str, offset: int) -> Location:
    offset = clamp_offset(offset, len(text))
    running = 0
    lines = text.split("\n")
    for row, line in enumerate(lines):
        if offset <= running + len(line):
            return (row, offset - running)
        running += len(line) + 1
    return (len(lines) - 1, len(lines[-1]))


class TextualBufferHost(ChangeNotifier):
    """Adapts an editor widget to ``BufferHost``.

    The widget reports user edits through its ``change_hook``; text written
    through ``set_text`` is announced by the host itself. Decorations are
    kept here and rendered by ``styled_text`` because ``TextArea`` has no
    public API for foreign highlight ranges.
    """

    def __init__(self, widget: EditorWidget) -> None:
        super().__init__()
        self.widget = widget
        self.decorations = DecorationLayer()
        self.revision = 0
        self._loading = False
        widget.change_hook = self._relay

    def get_text(self) -> str:
        return self.widget.text

    def set_text(self, text: str) -> None:
        self._notify(ChangePhase.BEFORE, self.widget.text)
        self._loading = True
        try:
            self.widget.load_text(text)
        finally:
            self._loading = False
        self._touch()
        self._notify(ChangePhase.AFTER, self.widget.text)

    def get_selection(self) -> Selection:
        selection = self.widget.selection
        text = self.widget.text
        start = location_to_offset(text, selection.start)
        end = location_to_offset(text, selection.end)
        return (start, end)

    def set_selection(self, start: int, end: int) -> None:
        text = self.widget.text
        ensure_selection(text, start, end)
        self.widget.select_locations(
            offset_to_location(text, start), offset_to_location(text, end)
        )

    def add_decoration(self, start: int, end: int, color: str, *, tag: str) -> None:
        self.decorations.add(start, end, color, tag)
        self._touch()

    def remove_decorations(self, tag: str) -> None:
        if self.decorations.remove_tag(tag):
            self._touch()

    def styled_text(self) -> Text:
        """The widget text with every decoration applied in paint order."""

        rendered = Text(self.widget.text)
        length = len(rendered.plain)
        for decoration in self.decorations:
            end = min(decoration.end, length)
            if decoration.start < end:
                rendered.stylize(decoration.color, decoration.start, end)
        return rendered

    def _relay(self, phase: ChangePhase, text: str) -> None:
        if self._loading:
            return
        if phase is ChangePhase.AFTER:
            self._touch()
        self._notify(phase, text)

    def _touch(self) -> None:
        self.revision += 1


__all__ = [
    "EditorWidget",
    "TextualBufferHost",
    "location_to_offset",
    "offset_to_location",
]
