"""
Rule base classes for prosefmt.

This module provides the base class every rule derives from and the
immutable rule set that the engine and fixer are built on.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple
import fnmatch

from prosefmt.core.content import FileContent
from prosefmt.core.issues import Issue
from prosefmt.errors import DuplicateRuleError


@dataclass(frozen=True)
class RuleMetadata:
    """Metadata for a rule."""
    rule_id: str
    name: str
    description: str
    message: str


class Rule(ABC):
    """
    Base class for all formatting rules.

    A rule pairs a check with a fix over a file's bytes. Both must be
    pure: no I/O, no state kept between calls, so one instance can be
    shared by every thread. ``fix`` must be idempotent on its own:
    ``fix(fix(c)) == fix(c)``.
    """

    @property
    @abstractmethod
    def metadata(self) -> RuleMetadata:
        """Return rule metadata."""

    @property
    def rule_id(self) -> str:
        return self.metadata.rule_id

    @abstractmethod
    def check(self, content: FileContent) -> Iterator[Issue]:
        """
        Scan content and yield issues.

        Issues are yielded in ascending line, then column order.
        """

    @abstractmethod
    def fix(self, content: FileContent) -> FileContent:
        """Return content with every violation of this rule removed."""

    def create_issue(
        self,
        content: FileContent,
        line: int,
        column: int,
        message: Optional[str] = None,
    ) -> Issue:
        """Create an issue using the rule's metadata as defaults."""
        return Issue(
            file=content.path,
            line=line,
            column=column,
            rule_id=self.metadata.rule_id,
            message=message or self.metadata.message,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rule_id!r})"


class RuleSet:
    """
    An ordered, read-only collection of rules.

    Registration order is the order fixes are applied in. Rule ids are
    unique within a set.
    """

    def __init__(self, rules: Iterable[Rule]):
        ordered: List[Rule] = []
        seen = set()
        for rule in rules:
            if rule.rule_id in seen:
                raise DuplicateRuleError(rule.rule_id)
            seen.add(rule.rule_id)
            ordered.append(rule)
        self._rules: Tuple[Rule, ...] = tuple(ordered)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({list(self.rule_ids)!r})"

    @property
    def rule_ids(self) -> Tuple[str, ...]:
        return tuple(rule.rule_id for rule in self._rules)

    def select(
        self,
        enabled: Optional[Sequence[str]] = None,
        disabled: Optional[Sequence[str]] = None,
    ) -> "RuleSet":
        """
        Return a new rule set filtered by id patterns.

        Patterns use fnmatch syntax (``TL0*``). An empty or missing
        ``enabled`` list keeps every rule; ``disabled`` always wins.
        """
        def matches(rule_id: str, patterns: Sequence[str]) -> bool:
            return any(fnmatch.fnmatchcase(rule_id, p) for p in patterns)

        selected = []
        for rule in self._rules:
            if enabled and not matches(rule.rule_id, enabled):
                continue
            if disabled and matches(rule.rule_id, disabled):
                continue
            selected.append(rule)
        return RuleSet(selected)
