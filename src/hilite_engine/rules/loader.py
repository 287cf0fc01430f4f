"""Build rule sets from JSON language definitions.

Documents use the camelCase keys of the language definition format::

    {
        "name": "kotlin",
        "keywords": ["val", "var", "fun"],
        "lineComment": "//",
        "blockCommentStart": "/*",
        "blockCommentEnd": "*/",
        "stringDelimiters": ["\\"", "'"],
        "numberRegex": null
    }

``strings`` is accepted as an older spelling of ``stringDelimiters``. The
optional ``types``, ``annotationPrefix``, ``declarationKeywords`` and
``numberSuffixes`` keys map onto the matching ``RuleSet`` fields.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from hilite_engine.runtime import telemetry

from .models import RuleSet, RuleSetError

DEFAULT_NAME = "custom"
DEFAULT_DELIMITERS = ('"', "'")


def _optional_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise RuleSetError(f"'{key}' must be a string or null", field=key)
    return value


def _str_list(
    data: Mapping[str, Any], key: str, default: Sequence[str] = ()
) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return tuple(default)
    if not isinstance(value, (list, tuple)):
        raise RuleSetError(f"'{key}' must be a list of strings", field=key)
    for item in value:
        if not isinstance(item, str):
            raise RuleSetError(f"'{key}' must be a list of strings", field=key)
    return tuple(value)


def rule_set_from_dict(data: Mapping[str, Any]) -> RuleSet:
    """Validate ``data`` and return the equivalent ``RuleSet``."""

    if not isinstance(data, Mapping):
        raise RuleSetError("language definition must be an object")

    if "stringDelimiters" in data:
        delimiters = _str_list(data, "stringDelimiters", DEFAULT_DELIMITERS)
    else:
        delimiters = _str_list(data, "strings", DEFAULT_DELIMITERS)

    return RuleSet(
        name=_optional_str(data, "name") or DEFAULT_NAME,
        keywords=_str_list(data, "keywords"),
        line_comment=_optional_str(data, "lineComment"),
        block_comment_start=_optional_str(data, "blockCommentStart"),
        block_comment_end=_optional_str(data, "blockCommentEnd"),
        string_delimiters=delimiters,
        number_regex=_optional_str(data, "numberRegex"),
        types=_str_list(data, "types"),
        annotation_prefix=_optional_str(data, "annotationPrefix"),
        declaration_keywords=_str_list(data, "declarationKeywords"),
        number_suffixes=_str_list(data, "numberSuffixes"),
    )


def rule_set_from_json(document: str) -> RuleSet:
    try:
        data = json.loads(document)
    except json.JSONDecodeError as exc:
        raise RuleSetError(f"language definition is not valid JSON: {exc}") from exc
    return rule_set_from_dict(data)


def load_rule_set(path: str | Path) -> RuleSet:
    """Read and validate a JSON language definition from ``path``."""

    source = Path(path)
    with telemetry.span(
        "rules::load",
        logger_name="hilite_engine.rules",
        component="rules",
        metadata={"path": str(source)},
    ) as handle:
        rules = rule_set_from_json(source.read_text(encoding="utf-8"))
        handle.add_metadata("language", rules.name)
        return rules


__all__ = ["load_rule_set", "rule_set_from_dict", "rule_set_from_json"]
