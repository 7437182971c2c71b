"""
Issue data structures.

This module defines the positioned issue emitted by rules, the result
containers returned by a check or write run, and the aggregator that
gives issues from many files a stable order.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple
import json


@dataclass(frozen=True)
class Issue:
    """A single rule violation at a 1-based line and column."""
    file: str
    line: int
    column: int
    rule_id: str
    message: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}: {self.rule_id}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "rule_id": self.rule_id,
            "message": self.message,
        }


def file_order_key(issue: Issue) -> Tuple[int, int, str]:
    """Order of issues within one file: position first, rule id breaks ties."""
    return issue.line, issue.column, issue.rule_id


def report_order_key(issue: Issue) -> Tuple[str, str, int, int]:
    """Order of issues across files in a report."""
    return issue.file, issue.rule_id, issue.line, issue.column


def aggregate_issues(issues: Iterable[Issue]) -> List[Issue]:
    """
    Merge issues from any number of files into one ordered list.

    The order depends only on the issues themselves, never on the order
    files were discovered or finished scanning.
    """
    return sorted(issues, key=report_order_key)


@dataclass
class ScanResult:
    """Results from a complete check run."""
    issues: List[Issue]
    files_scanned: int
    rejected: Dict[str, str] = field(default_factory=dict)
    elapsed_seconds: float = 0.0

    @property
    def issue_count(self) -> int:
        return len(self.issues)

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)

    @property
    def files_with_issues(self) -> List[str]:
        return sorted({issue.file for issue in self.issues})

    @property
    def rules_triggered(self) -> List[str]:
        return sorted({issue.rule_id for issue in self.issues})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": {
                "files_scanned": self.files_scanned,
                "files_with_issues": len(self.files_with_issues),
                "total_issues": self.issue_count,
                "rules_triggered": self.rules_triggered,
                "elapsed_seconds": self.elapsed_seconds,
            },
            "issues": [issue.to_dict() for issue in self.issues],
            "rejected": dict(sorted(self.rejected.items())),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
