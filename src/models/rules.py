"""
Rule models

A rule is a single pattern -> replacement-template substitution. Rules are
immutable and grouped into ordered rule sets, where order is load-bearing.
"""

import re
from dataclasses import dataclass
from typing import Callable, Match, Pattern, Tuple, Union


@dataclass(frozen=True)
class Rule:
    r"""
    A named regular-expression substitution

    Attributes:
        name: Short identifier used in logs and tests (e.g., "h1", "link")
        pattern: Compiled regular expression
        replacement: Template with numbered group references (\1, \2, ...),
                     or a callable taking the match and returning its text

    Example:
        >>> rule = Rule("bold", re.compile(r"\*\*(.+?)\*\*"), r"<b>\1</b>")
        >>> rule.apply("**hi**")
        '<b>hi</b>'
    """
    name: str
    pattern: Pattern[str]
    replacement: Union[str, Callable[[Match[str]], str]]

    def apply(self, text: str) -> str:
        """Substitute every match of the pattern in text"""
        return self.pattern.sub(self.replacement, text)


RuleSet = Tuple[Rule, ...]


def rule_make(
    name: str,
    pattern: str,
    replacement: Union[str, Callable[[Match[str]], str]],
    flags: int = 0,
) -> Rule:
    """Compile pattern and build a Rule"""
    return Rule(name=name, pattern=re.compile(pattern, flags), replacement=replacement)


def ruleset_apply(rules: RuleSet, text: str) -> str:
    """Apply every rule of a rule set to text, in order"""
    for rule in rules:
        text = rule.apply(text)
    return text
