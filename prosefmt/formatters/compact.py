"""
Compact output formatter, one line per issue.
"""

import sys
from typing import List

from prosefmt.core.issues import Issue, ScanResult, aggregate_issues
from prosefmt.remediation.fixer import WriteResult


NO_TEXT_FILES = "No text files found."


# ANSI color codes
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"


def supports_color() -> bool:
    """Check if the terminal supports color output."""
    if not hasattr(sys.stdout, "isatty"):
        return False
    return sys.stdout.isatty()


class CompactFormatter:
    """
    Formats results as ``path:line:column: rule_id: message`` lines
    followed by a one-line summary.
    """

    def __init__(self, use_color: bool = False):
        self.use_color = use_color and supports_color()

    def _color(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if self.use_color:
            return f"{color}{text}{Colors.RESET}"
        return text

    def format_issue(self, issue: Issue) -> str:
        location = f"{issue.file}:{issue.line}:{issue.column}:"
        return f"{self._color(location, Colors.CYAN)} {self._color(issue.rule_id + ':', Colors.YELLOW)} {issue.message}"

    def format_summary(self, files_scanned: int, issue_count: int) -> str:
        return f"{files_scanned} file(s) scanned, {issue_count} issue(s)."

    def format_result(self, result: ScanResult) -> str:
        """Format a complete check result."""
        lines: List[str] = []
        if result.files_scanned == 0:
            lines.append(NO_TEXT_FILES)
        for issue in aggregate_issues(result.issues):
            lines.append(self.format_issue(issue))
        lines.append(self.format_summary(result.files_scanned, result.issue_count))
        return "\n".join(lines) + "\n"

    def format_write(self, result: WriteResult) -> str:
        """Format a write run: the rewritten paths, or diffs for a dry run."""
        lines: List[str] = []
        if result.files_scanned == 0:
            lines.append(NO_TEXT_FILES)

        written = result.written
        if result.dry_run:
            for fix in result.fixes:
                if fix.changed:
                    lines.append(fix.diff.rstrip("\n"))
            if written:
                lines.append(f"Would write {len(written)} file(s):")
                lines.extend(written)
        elif written:
            lines.append(self._color(f"Wrote {len(written)} file(s):", Colors.GREEN))
            lines.extend(written)

        if not lines:
            return ""
        return "\n".join(lines) + "\n"
