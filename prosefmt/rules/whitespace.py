"""
Trailing whitespace rule.
"""

from typing import Iterator

from prosefmt.core.content import FileContent, LINE_TERMINATOR
from prosefmt.core.issues import Issue
from prosefmt.core.rules import Rule, RuleMetadata


# Only spaces and tabs count. CR is line content, not whitespace.
TRAILING_BYTES = b" \t"


class TrailingWhitespaceRule(Rule):
    """Flags lines that end in spaces or tabs."""

    _metadata = RuleMetadata(
        rule_id="TL010",
        name="trailing-whitespace",
        description="Lines must not end with spaces or tabs.",
        message="no trailing whitespace",
    )

    @property
    def metadata(self) -> RuleMetadata:
        return self._metadata

    def check(self, content: FileContent) -> Iterator[Issue]:
        for line in content.iter_lines():
            stripped = line.data.rstrip(TRAILING_BYTES)
            if len(stripped) != len(line.data):
                # Column of the first trailing space/tab byte.
                yield self.create_issue(content, line.number, len(stripped) + 1)

    def fix(self, content: FileContent) -> FileContent:
        if not content.data:
            return content
        lines = content.data.split(LINE_TERMINATOR)
        fixed = LINE_TERMINATOR.join(line.rstrip(TRAILING_BYTES) for line in lines)
        return content.with_data(fixed)
