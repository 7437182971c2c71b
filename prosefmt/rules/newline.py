"""
Final newline rule.

A non-empty file must end with exactly one LF: no missing terminator
and no trailing blank lines. An empty file is left alone.
"""

from typing import Iterator

from prosefmt.core.content import FileContent, LINE_TERMINATOR
from prosefmt.core.issues import Issue
from prosefmt.core.rules import Rule, RuleMetadata


class FinalNewlineRule(Rule):
    """Flags files that do not end in exactly one newline."""

    _metadata = RuleMetadata(
        rule_id="TL001",
        name="final-newline",
        description="Non-empty files must end with exactly one newline and no trailing blank lines.",
        message="file must end with exactly one newline",
    )

    @property
    def metadata(self) -> RuleMetadata:
        return self._metadata

    def check(self, content: FileContent) -> Iterator[Issue]:
        if content.is_empty or content.trailing_terminators == 1:
            return
        last = content.last_line()
        yield self.create_issue(content, last.number, last.end_column)

    def fix(self, content: FileContent) -> FileContent:
        if content.is_empty:
            return content
        # A file made only of newlines collapses to a single "\n".
        fixed = content.data.rstrip(LINE_TERMINATOR) + LINE_TERMINATOR
        if fixed == content.data:
            return content
        return content.with_data(fixed)
