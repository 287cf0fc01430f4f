"""Language rule sets: the lexical categories and markers a tokenizer runs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional


class Category(str, Enum):
    """Lexical categories recognised by the tokenizer."""

    KEYWORD = "keyword"
    TYPE = "type"
    ANNOTATION = "annotation"
    NUMBER = "number"
    DECLARATION = "declaration"
    COMMENT = "comment"
    STRING = "string"


# Low to high: later categories are painted over earlier ones.
PAINT_ORDER: tuple[Category, ...] = (
    Category.KEYWORD,
    Category.TYPE,
    Category.ANNOTATION,
    Category.NUMBER,
    Category.DECLARATION,
    Category.COMMENT,
    Category.STRING,
)


class RuleSetError(ValueError):
    """Raised when a rule set definition cannot be turned into patterns."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


def _words(values: Iterable[str], *, field: str) -> tuple[str, ...]:
    cleaned: dict[str, None] = {}
    for value in values:
        if not isinstance(value, str) or not value.strip():
            raise RuleSetError(f"{field} entries must be non-empty strings", field=field)
        cleaned[value.strip()] = None
    return tuple(cleaned)


def _marker(value: Optional[str], *, field: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise RuleSetError(f"{field} must be a string", field=field)
    return value or None


@dataclass(frozen=True, slots=True)
class RuleSet:
    """Immutable description of one language.

    Markers are plain text and are escaped before use; only ``number_regex``
    is a regular expression, and it replaces the default numeric rule.
    """

    name: str
    keywords: tuple[str, ...] = ()
    line_comment: Optional[str] = None
    block_comment_start: Optional[str] = None
    block_comment_end: Optional[str] = None
    string_delimiters: tuple[str, ...] = ('"', "'")
    number_regex: Optional[str] = None
    types: tuple[str, ...] = ()
    annotation_prefix: Optional[str] = None
    declaration_keywords: tuple[str, ...] = ()
    number_suffixes: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise RuleSetError("name cannot be empty", field="name")
        object.__setattr__(self, "keywords", _words(self.keywords, field="keywords"))
        object.__setattr__(self, "types", _words(self.types, field="types"))
        object.__setattr__(
            self,
            "declaration_keywords",
            _words(self.declaration_keywords, field="declaration_keywords"),
        )
        object.__setattr__(
            self,
            "number_suffixes",
            _words(self.number_suffixes, field="number_suffixes"),
        )
        object.__setattr__(
            self, "line_comment", _marker(self.line_comment, field="line_comment")
        )
        start = _marker(self.block_comment_start, field="block_comment_start")
        end = _marker(self.block_comment_end, field="block_comment_end")
        if (start is None) != (end is None):
            raise RuleSetError(
                "block comment markers must be given together",
                field="block_comment_start" if start is None else "block_comment_end",
            )
        object.__setattr__(self, "block_comment_start", start)
        object.__setattr__(self, "block_comment_end", end)
        object.__setattr__(
            self,
            "annotation_prefix",
            _marker(self.annotation_prefix, field="annotation_prefix"),
        )

        delimiters = tuple(self.string_delimiters)
        for delimiter in delimiters:
            if not isinstance(delimiter, str) or len(delimiter) not in (1, 3):
                raise RuleSetError(
                    f"string delimiter {delimiter!r} must be one or three characters",
                    field="string_delimiters",
                )
        object.__setattr__(self, "string_delimiters", tuple(dict.fromkeys(delimiters)))

        if self.number_regex is not None:
            try:
                re.compile(self.number_regex)
            except re.error as exc:
                raise RuleSetError(
                    f"number_regex is not a valid pattern: {exc}", field="number_regex"
                ) from exc

    @property
    def has_block_comments(self) -> bool:
        return self.block_comment_start is not None


__all__ = ["Category", "PAINT_ORDER", "RuleSet", "RuleSetError"]
