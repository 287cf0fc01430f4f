"""Paint tokenizer spans onto a host buffer as tagged color decorations."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Sequence

from hilite_engine.buffer.host import BufferHost
from hilite_engine.rules.models import Category

from .tokenizer import Span

ENGINE_TAG = "hilite_engine"

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{8})")

DEFAULT_COLORS: Mapping[Category, str] = MappingProxyType(
    {
        Category.KEYWORD: "#1565C0",
        Category.TYPE: "#00838F",
        Category.ANNOTATION: "#EF6C00",
        Category.NUMBER: "#D32F2F",
        Category.DECLARATION: "#8E24AA",
        Category.COMMENT: "#9E9E9E",
        Category.STRING: "#2E7D32",
    }
)

ColorOf = Callable[[Category], Optional[str]]


@dataclass(frozen=True, slots=True)
class Palette:
    """Category to ``#RRGGBB`` color mapping; unmapped categories stay unpainted."""

    colors: Mapping[Category, str] = field(default_factory=lambda: DEFAULT_COLORS)

    def __post_init__(self) -> None:
        normalized = {}
        for category, color in self.colors.items():
            if not _HEX_COLOR.fullmatch(color):
                raise ValueError(f"Color {color!r} for {category} is not a hex color")
            normalized[Category(category)] = color
        object.__setattr__(self, "colors", MappingProxyType(normalized))

    def color_of(self, category: Category) -> Optional[str]:
        return self.colors.get(category)

    def with_colors(self, **overrides: str) -> "Palette":
        """Return a copy with colors replaced by category value, e.g. ``keyword=``."""

        merged = dict(self.colors)
        for name, color in overrides.items():
            merged[Category(name)] = color
        return Palette(merged)


def _selection_in_bounds(selection: Optional[tuple[int, int]], length: int) -> bool:
    if selection is None:
        return False
    low, high = sorted(selection)
    return 0 <= low and high <= length


class OverlayManager:
    """Owns every decoration carrying ``tag`` on the buffers it paints."""

    def __init__(self, *, tag: str = ENGINE_TAG) -> None:
        if not tag:
            raise ValueError("tag cannot be empty")
        self.tag = tag

    def clear(self, host: BufferHost) -> None:
        host.remove_decorations(self.tag)

    def repaint(
        self, host: BufferHost, spans: Sequence[Span], color_of: ColorOf
    ) -> int:
        """Replace this manager's decorations with ``spans``; return how many were painted.

        Spans are attached in the given order so that later ones override
        earlier ones where they overlap. The host selection is captured first
        and put back afterwards when it still fits the text; otherwise it is
        left as the host has it.
        """

        selection = host.get_selection()
        length = len(host.get_text())

        self.clear(host)
        painted = 0
        for span in spans:
            color = color_of(span.category)
            if color is None:
                continue
            start = max(0, min(span.start, length))
            end = max(start, min(span.end, length))
            if start == end:
                continue
            host.add_decoration(start, end, color, tag=self.tag)
            painted += 1

        if _selection_in_bounds(selection, length):
            host.set_selection(*selection)
        return painted


__all__ = ["DEFAULT_COLORS", "ENGINE_TAG", "OverlayManager", "Palette"]
