from __future__ import annotations

import json
from pathlib import Path

import pytest

from hilite_engine.highlight import tokenize
from hilite_engine.rules import (
    KOTLIN,
    Category,
    RuleSet,
    RuleSetError,
    builtin_names,
    get_builtin,
    load_rule_set,
    rule_set_from_dict,
    rule_set_from_json,
)


def make_definition(**overrides: object) -> dict[str, object]:
    definition: dict[str, object] = {
        "name": "mini",
        "keywords": ["let", "fn"],
        "lineComment": "--",
        "blockCommentStart": "{-",
        "blockCommentEnd": "-}",
        "stringDelimiters": ['"'],
        "numberRegex": None,
    }
    definition.update(overrides)
    return definition


def test_rule_set_from_dict_maps_camel_case_keys() -> None:
    rules = rule_set_from_dict(make_definition(declarationKeywords=["fn"]))

    assert rules == RuleSet(
        name="mini",
        keywords=("let", "fn"),
        line_comment="--",
        block_comment_start="{-",
        block_comment_end="-}",
        string_delimiters=('"',),
        declaration_keywords=("fn",),
    )


def test_strings_alias_and_defaults() -> None:
    aliased = rule_set_from_dict({"strings": ["'"]})
    defaults = rule_set_from_dict({})

    assert aliased.string_delimiters == ("'",)
    assert defaults.name == "custom"
    assert defaults.string_delimiters == ('"', "'")
    assert defaults.line_comment is None


def test_block_comment_markers_must_be_paired() -> None:
    with pytest.raises(RuleSetError) as excinfo:
        rule_set_from_dict(make_definition(blockCommentEnd=None))

    assert excinfo.value.field == "block_comment_end"


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"stringDelimiters": ["''"]}, "string_delimiters"),
        ({"numberRegex": "("}, "number_regex"),
        ({"keywords": "let"}, "keywords"),
        ({"keywords": ["let", " "]}, "keywords"),
        ({"lineComment": 3}, "lineComment"),
    ],
)
def test_invalid_definitions_are_rejected_at_load_time(
    overrides: dict[str, object], field: str
) -> None:
    with pytest.raises(RuleSetError) as excinfo:
        rule_set_from_dict(make_definition(**overrides))

    assert excinfo.value.field == field


def test_invalid_json_is_a_rule_set_error() -> None:
    with pytest.raises(RuleSetError):
        rule_set_from_json("{not json")
    with pytest.raises(RuleSetError):
        rule_set_from_json("[1, 2]")


def test_load_rule_set_from_file_drives_tokenizer(tmp_path: Path) -> None:
    path = tmp_path / "mini.json"
    path.write_text(json.dumps(make_definition()), encoding="utf-8")

    rules = load_rule_set(path)
    text = 'let x = "fn" -- fn 1\n{- let -}'
    spans = tokenize(text, rules)

    keywords = [text[s.start : s.end] for s in spans if s.category is Category.KEYWORD]
    comments = [text[s.start : s.end] for s in spans if s.category is Category.COMMENT]
    assert rules.name == "mini"
    assert keywords == ["let", "fn", "fn", "let"]
    assert comments == ["{- let -}", "-- fn 1"]


def test_builtin_lookup() -> None:
    assert get_builtin("Kotlin") is KOTLIN
    assert set(builtin_names()) == {"kotlin", "java", "python"}
    with pytest.raises(KeyError):
        get_builtin("cobol")


def test_rule_set_deduplicates_words_and_delimiters() -> None:
    rules = RuleSet(
        name="dupes", keywords=("if", "if", " else "), string_delimiters=('"', '"')
    )

    assert rules.keywords == ("if", "else")
    assert rules.string_delimiters == ('"',)
