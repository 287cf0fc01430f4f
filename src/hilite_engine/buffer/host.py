"""Boundary types shared by the engine and the widgets that host its buffers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional, Protocol, Tuple

Selection = Tuple[int, int]  # (start, end) character offsets


class ChangePhase(str, Enum):
    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """Fired twice per mutation: ``BEFORE`` with the old text, ``AFTER`` with the new."""

    phase: ChangePhase
    text: str


ChangeListener = Callable[[ChangeEvent], None]


@dataclass(frozen=True, slots=True)
class Decoration:
    start: int
    end: int
    color: str
    tag: str


class BufferHost(Protocol):
    """What the engine needs from a text widget.

    Hosts own the text, selection and decorations. Every text mutation,
    whether typed by the user or applied through ``set_text``, must notify
    listeners with a ``BEFORE`` event followed by an ``AFTER`` event.
    """

    def get_text(self) -> str:
        ...

    def set_text(self, text: str) -> None:
        ...

    def get_selection(self) -> Selection:
        ...

    def set_selection(self, start: int, end: int) -> None:
        ...

    def add_change_listener(self, listener: ChangeListener) -> None:
        ...

    def remove_change_listener(self, listener: ChangeListener) -> None:
        ...

    def add_decoration(self, start: int, end: int, color: str, *, tag: str) -> None:
        ...

    def remove_decorations(self, tag: str) -> None:
        ...


class ChangeNotifier:
    """Listener bookkeeping hosts can inherit."""

    def __init__(self) -> None:
        self._listeners: List[ChangeListener] = []

    def add_change_listener(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_change_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _notify(self, phase: ChangePhase, text: str) -> None:
        event = ChangeEvent(phase=phase, text=text)
        # Listeners may detach themselves while being notified.
        for listener in tuple(self._listeners):
            listener(event)


class DecorationLayer:
    """Ordered decoration store; later decorations win where ranges overlap."""

    def __init__(self) -> None:
        self._items: List[Decoration] = []

    def __iter__(self) -> Iterator[Decoration]:
        return iter(tuple(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def add(self, start: int, end: int, color: str, tag: str) -> Decoration:
        if start < 0 or end < start:
            raise ValueError(f"Invalid decoration range [{start}, {end})")
        decoration = Decoration(start=start, end=end, color=color, tag=tag)
        self._items.append(decoration)
        return decoration

    def remove_tag(self, tag: str) -> int:
        kept = [item for item in self._items if item.tag != tag]
        removed = len(self._items) - len(kept)
        self._items = kept
        return removed

    def tagged(self, tag: str) -> List[Decoration]:
        return [item for item in self._items if item.tag == tag]

    def color_at(self, offset: int) -> Optional[str]:
        for item in reversed(self._items):
            if item.start <= offset < item.end:
                return item.color
        return None


__all__ = [
    "BufferHost",
    "ChangeEvent",
    "ChangeListener",
    "ChangeNotifier",
    "ChangePhase",
    "Decoration",
    "DecorationLayer",
    "Selection",
]
