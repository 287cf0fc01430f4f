"""Pattern-driven tokenizer turning text into categorized spans."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from hilite_engine.rules.models import PAINT_ORDER, Category, RuleSet

NUMBER_BODY = (
    r"0[xX][0-9A-Fa-f][0-9A-Fa-f_]*"
    r"|0[bB][01][01_]*"
    r"|0[oO][0-7][0-7_]*"
    r"|\d[\d_]*(?:\.\d[\d_]*)?(?:[eE][+-]?\d[\d_]*)?"
)
IDENTIFIER = r"[A-Za-z_]\w*"


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open ``[start, end)`` range of text tagged with a category."""

    category: Category
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class CategoryPattern:
    """Compiled pattern plus the group whose range is reported."""

    category: Category
    pattern: re.Pattern[str]
    group: int = 0


Tokenizer = Callable[[str, RuleSet], Sequence[Span]]


def _alternation(words: Iterable[str]) -> str:
    ordered = sorted(words, key=len, reverse=True)
    return "|".join(re.escape(word) for word in ordered)


def _word_pattern(category: Category, words: Sequence[str]) -> Optional[CategoryPattern]:
    if not words:
        return None
    return CategoryPattern(category, re.compile(rf"\b(?:{_alternation(words)})\b"))


def _number_pattern(rules: RuleSet) -> CategoryPattern:
    if rules.number_regex is not None:
        return CategoryPattern(Category.NUMBER, re.compile(rules.number_regex))
    suffix = ""
    if rules.number_suffixes:
        suffix = f"(?:{_alternation(rules.number_suffixes)})?"
    return CategoryPattern(
        Category.NUMBER, re.compile(rf"\b(?:{NUMBER_BODY}){suffix}\b")
    )


def _string_pattern(delimiter: str) -> re.Pattern[str]:
    quote = re.escape(delimiter)
    if len(delimiter) == 3:
        return re.compile(rf"{quote}[\s\S]*?{quote}")
    excluded = "\\\\\\n" + ("\\" + delimiter if delimiter in "]^-\\" else delimiter)
    return re.compile(rf"{quote}(?:\\.|[^{excluded}])*{quote}")


def _patterns_for(rules: RuleSet) -> Dict[Category, List[CategoryPattern]]:
    patterns: Dict[Category, List[CategoryPattern]] = {
        category: [] for category in PAINT_ORDER
    }

    keyword = _word_pattern(Category.KEYWORD, rules.keywords)
    if keyword:
        patterns[Category.KEYWORD].append(keyword)

    type_names = _word_pattern(Category.TYPE, rules.types)
    if type_names:
        patterns[Category.TYPE].append(type_names)

    if rules.annotation_prefix:
        prefix = re.escape(rules.annotation_prefix)
        patterns[Category.ANNOTATION].append(
            CategoryPattern(
                Category.ANNOTATION,
                re.compile(rf"{prefix}{IDENTIFIER}(?:\.{IDENTIFIER})*"),
            )
        )

    patterns[Category.NUMBER].append(_number_pattern(rules))

    if rules.declaration_keywords:
        patterns[Category.DECLARATION].append(
            CategoryPattern(
                Category.DECLARATION,
                re.compile(
                    rf"\b(?:{_alternation(rules.declaration_keywords)})\s+({IDENTIFIER})"
                ),
                group=1,
            )
        )

    if rules.has_block_comments:
        start = re.escape(rules.block_comment_start)
        end = re.escape(rules.block_comment_end)
        patterns[Category.COMMENT].append(
            CategoryPattern(Category.COMMENT, re.compile(rf"{start}[\s\S]*?{end}"))
        )
    if rules.line_comment:
        patterns[Category.COMMENT].append(
            CategoryPattern(
                Category.COMMENT, re.compile(rf"{re.escape(rules.line_comment)}[^\n]*")
            )
        )

    # Triple-quoted forms go last so they win over the short forms they contain.
    for delimiter in sorted(rules.string_delimiters, key=len):
        patterns[Category.STRING].append(
            CategoryPattern(Category.STRING, _string_pattern(delimiter))
        )

    return patterns


@lru_cache(maxsize=32)
def compile_rules(rules: RuleSet) -> tuple[CategoryPattern, ...]:
    """Return the rule set's patterns flattened into paint order."""

    by_category = _patterns_for(rules)
    return tuple(
        pattern for category in PAINT_ORDER for pattern in by_category[category]
    )


def tokenize(text: str, rules: RuleSet) -> tuple[Span, ...]:
    """Run every category pattern over ``text`` and return spans in paint order.

    Overlapping spans are expected; consumers paint them in order so later
    spans (comments, then strings) override earlier ones. Empty matches and
    unterminated constructs produce no span.
    """

    spans: List[Span] = []
    for entry in compile_rules(rules):
        group = entry.group if entry.group <= entry.pattern.groups else 0
        for match in entry.pattern.finditer(text):
            start, end = match.span(group)
            if start < 0 or start >= end:
                continue
            spans.append(Span(entry.category, start, end))
    return tuple(spans)


def resolve_runs(spans: Iterable[Span]) -> List[Span]:
    """Flatten overlapping spans into disjoint runs, last span winning."""

    painted: Dict[int, Category] = {}
    for span in spans:
        for offset in range(span.start, span.end):
            painted[offset] = span.category

    runs: List[Span] = []
    for offset in sorted(painted):
        category = painted[offset]
        last = runs[-1] if runs else None
        if last and last.end == offset and last.category is category:
            runs[-1] = Span(category, last.start, offset + 1)
        else:
            runs.append(Span(category, offset, offset + 1))
    return runs


def category_at(spans: Sequence[Span], offset: int) -> Optional[Category]:
    """Category painted at ``offset`` once every span has been applied."""

    for span in reversed(spans):
        if span.start <= offset < span.end:
            return span.category
    return None


__all__ = [
    "CategoryPattern",
    "Span",
    "Tokenizer",
    "category_at",
    "compile_rules",
    "resolve_runs",
    "tokenize",
]
