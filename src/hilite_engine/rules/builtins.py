"""Built-in rule sets shipped with the engine."""

from __future__ import annotations

from typing import Mapping

from .models import RuleSet

KOTLIN = RuleSet(
    name="kotlin",
    keywords=(
        "as", "break", "class", "continue", "do", "else", "false", "for", "fun",
        "if", "in", "interface", "is", "null", "object", "package", "return",
        "super", "this", "throw", "true", "try", "typealias", "typeof", "val",
        "var", "when", "while", "by", "catch", "constructor", "delegate",
        "dynamic", "field", "file", "finally", "get", "import", "init", "param",
        "private", "public", "protected", "set", "setparam", "where", "actual",
        "abstract", "annotation", "companion", "const", "crossinline", "data",
        "enum", "expect", "external", "final", "infix", "inline", "inner",
        "internal", "lateinit", "noinline", "open", "operator", "out",
        "override", "reified", "sealed", "suspend", "tailrec", "vararg",
    ),
    line_comment="//",
    block_comment_start="/*",
    block_comment_end="*/",
    string_delimiters=('"', "'", '"""'),
    types=(
        "Any", "Unit", "Nothing", "Boolean", "Byte", "Short", "Int", "Long",
        "Float", "Double", "Char", "String", "Array", "List", "Map", "Set",
    ),
    annotation_prefix="@",
    declaration_keywords=("fun", "class", "interface", "object"),
    number_suffixes=("L", "f", "F", "u", "U", "uL", "UL"),
)

JAVA = RuleSet(
    name="java",
    keywords=(
        "abstract", "assert", "boolean", "break", "byte", "case", "catch",
        "char", "class", "const", "continue", "default", "do", "double", "else",
        "enum", "extends", "final", "finally", "float", "for", "goto", "if",
        "implements", "import", "instanceof", "int", "interface", "long",
        "native", "new", "package", "private", "protected", "public", "return",
        "short", "static", "strictfp", "super", "switch", "synchronized", "this",
        "throw", "throws", "transient", "try", "void", "volatile", "while",
        "var", "record", "sealed", "permits", "yield", "true", "false", "null",
    ),
    line_comment="//",
    block_comment_start="/*",
    block_comment_end="*/",
    string_delimiters=('"', "'", '"""'),
    types=("String", "Object", "Integer", "Long", "Double", "Boolean", "List", "Map"),
    annotation_prefix="@",
    declaration_keywords=("class", "interface", "enum", "record"),
    number_suffixes=("L", "l", "f", "F", "d", "D"),
)

PYTHON = RuleSet(
    name="python",
    keywords=(
        "False", "None", "True", "and", "as", "assert", "async", "await",
        "break", "class", "continue", "def", "del", "elif", "else", "except",
        "finally", "for", "from", "global", "if", "import", "in", "is",
        "lambda", "match", "case", "nonlocal", "not", "or", "pass", "raise",
        "return", "try", "while", "with", "yield",
    ),
    line_comment="#",
    string_delimiters=('"', "'", '"""', "'''"),
    types=("int", "float", "str", "bytes", "bool", "list", "dict", "set", "tuple"),
    annotation_prefix="@",
    declaration_keywords=("def", "class"),
    number_suffixes=("j", "J"),
)

BUILTIN_RULE_SETS: Mapping[str, RuleSet] = {
    rules.name: rules for rules in (KOTLIN, JAVA, PYTHON)
}


def get_builtin(name: str) -> RuleSet:
    try:
        return BUILTIN_RULE_SETS[name.lower()]
    except KeyError as exc:
        known = ", ".join(sorted(BUILTIN_RULE_SETS))
        raise KeyError(f"Unknown language '{name}' (known: {known})") from exc


def builtin_names() -> tuple[str, ...]:
    return tuple(BUILTIN_RULE_SETS)


__all__ = ["BUILTIN_RULE_SETS", "JAVA", "KOTLIN", "PYTHON", "builtin_names", "get_builtin"]
