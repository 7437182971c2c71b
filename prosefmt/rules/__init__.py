"""
Built-in rule catalog.

Rules are listed in the order their fixes are applied.
"""

from typing import List, Type

from prosefmt.core.rules import Rule, RuleSet
from prosefmt.rules.newline import FinalNewlineRule
from prosefmt.rules.whitespace import TrailingWhitespaceRule


RULES: List[Type[Rule]] = [
    TrailingWhitespaceRule,
    FinalNewlineRule,
]


def default_rule_set() -> RuleSet:
    """Build a rule set holding one instance of every built-in rule."""
    return RuleSet(rule_cls() for rule_cls in RULES)


__all__ = [
    "RULES",
    "FinalNewlineRule",
    "TrailingWhitespaceRule",
    "default_rule_set",
]
