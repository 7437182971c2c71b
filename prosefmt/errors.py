"""
Exceptions raised by prosefmt.

Rule violations are never raised; they are collected as issues.
Everything here is fatal for the current run.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from prosefmt.core.issues import Issue


class ProsefmtError(Exception):
    """Base class for all prosefmt errors."""


class FileAccessError(ProsefmtError):
    """A file could not be read or written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")

    @classmethod
    def from_os_error(cls, path: str, error: OSError) -> "FileAccessError":
        return cls(path, error.strerror or str(error))


class ConvergenceError(ProsefmtError):
    """
    The fixer did not reach a fixed point within its iteration limit.

    This means two or more rules keep undoing each other's fixes.
    """

    def __init__(self, path: str, iterations: int, remaining: Optional[List["Issue"]] = None):
        self.path = path
        self.iterations = iterations
        self.remaining = list(remaining or [])
        rule_ids = sorted({issue.rule_id for issue in self.remaining})
        message = f"{path}: fixes did not converge after {iterations} iteration(s)"
        if rule_ids:
            message += f" (still failing: {', '.join(rule_ids)})"
        super().__init__(message)


class DuplicateRuleError(ProsefmtError, ValueError):
    """Two rules in one rule set share an id."""

    def __init__(self, rule_id: str):
        self.rule_id = rule_id
        super().__init__(f"Duplicate rule id: {rule_id}")


class ConfigError(ProsefmtError):
    """The configuration file is missing or malformed."""
