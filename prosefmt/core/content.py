"""
File content model.

A file is handled as raw bytes and never decoded. Lines are split on
the LF byte only; a trailing LF terminates the last line rather than
starting a new, empty one.
"""

from dataclasses import dataclass
from typing import Iterator, List


LINE_TERMINATOR = b"\n"


@dataclass(frozen=True)
class Line:
    """A single line of a file, without its terminator."""
    number: int
    data: bytes
    terminated: bool

    @property
    def end_column(self) -> int:
        """Column just past the last byte of the line."""
        return len(self.data) + 1


@dataclass(frozen=True)
class FileContent:
    """
    Immutable snapshot of a file's bytes.

    Rules read it, and fixes return a new instance via ``with_data``.
    """
    data: bytes
    path: str = "<stdin>"

    @classmethod
    def read(cls, path: str) -> "FileContent":
        """Read a whole file. OSError propagates to the caller."""
        with open(path, "rb") as f:
            return cls(data=f.read(), path=path)

    def with_data(self, data: bytes) -> "FileContent":
        """Return a copy holding different bytes for the same path."""
        return FileContent(data=data, path=self.path)

    @property
    def is_empty(self) -> bool:
        return not self.data

    @property
    def trailing_terminators(self) -> int:
        """Number of LF bytes at the very end of the content."""
        return len(self.data) - len(self.data.rstrip(LINE_TERMINATOR))

    @property
    def final_line_terminated(self) -> bool:
        return self.data.endswith(LINE_TERMINATOR)

    @property
    def line_count(self) -> int:
        if not self.data:
            return 0
        count = self.data.count(LINE_TERMINATOR)
        if not self.final_line_terminated:
            count += 1
        return count

    def iter_lines(self) -> Iterator[Line]:
        """Yield lines in order, with their 1-based numbers."""
        data = self.data
        size = len(data)
        offset = 0
        number = 1
        while offset < size:
            end = data.find(LINE_TERMINATOR, offset)
            if end == -1:
                yield Line(number=number, data=data[offset:], terminated=False)
                return
            yield Line(number=number, data=data[offset:end], terminated=True)
            offset = end + 1
            number += 1

    @property
    def lines(self) -> List[Line]:
        return list(self.iter_lines())

    def last_line(self) -> Line:
        """
        Return the last line.

        Empty content has no lines; a synthetic empty line 1 is returned
        so positions stay well-defined.
        """
        last = Line(number=1, data=b"", terminated=False)
        for line in self.iter_lines():
            last = line
        return last
