"""Language rule sets, built-in definitions, and the JSON loader."""

from .builtins import BUILTIN_RULE_SETS, JAVA, KOTLIN, PYTHON, builtin_names, get_builtin
from .loader import load_rule_set, rule_set_from_dict, rule_set_from_json
from .models import PAINT_ORDER, Category, RuleSet, RuleSetError

__all__ = [
    "BUILTIN_RULE_SETS",
    "Category",
    "JAVA",
    "KOTLIN",
    "PAINT_ORDER",
    "PYTHON",
    "RuleSet",
    "RuleSetError",
    "builtin_names",
    "get_builtin",
    "load_rule_set",
    "rule_set_from_dict",
    "rule_set_from_json",
]
