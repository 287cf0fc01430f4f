"""Word, character, and line counts for status displays."""

from __future__ import annotations

import re
from dataclasses import dataclass

_WORD = re.compile(r"\S+")


@dataclass(frozen=True, slots=True)
class BufferStats:
    words: int
    characters: int
    lines: int

    def summary(self) -> str:
        return f"Words: {self.words} | Chars: {self.characters} | Lines: {self.lines}"


def compute_stats(text: str) -> BufferStats:
    lines = text.count("\n") + 1 if text else 0
    return BufferStats(
        words=len(_WORD.findall(text)),
        characters=len(text),
        lines=lines,
    )


__all__ = ["BufferStats", "compute_stats"]
