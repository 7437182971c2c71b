"""
Fixer for rewriting files until no rule reports an issue.

This module provides:
- Fixed-point resolution of content over a whole rule set
- Before/after diffs for dry runs
- Atomic replacement of fixed files on disk
"""

import difflib
import logging
import os
import shutil
import tempfile
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

from prosefmt.core.content import FileContent
from prosefmt.core.engine import ScanEngine
from prosefmt.core.issues import Issue
from prosefmt.errors import ConvergenceError, FileAccessError
from prosefmt.utils import map_in_order


logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 5


@dataclass
class FixResult:
    """Result of fixing one file."""
    path: str
    original: bytes
    fixed: bytes
    issues: List[Issue]
    iterations: int = 1

    @property
    def changed(self) -> bool:
        return self.original != self.fixed

    @property
    def diff(self) -> str:
        """Unified diff between the original and fixed bytes."""
        path = os.fsencode(self.path)
        lines = difflib.diff_bytes(
            difflib.unified_diff,
            self.original.splitlines(keepends=True),
            self.fixed.splitlines(keepends=True),
            fromfile=b"a/" + path,
            tofile=b"b/" + path,
        )
        return b"".join(lines).decode("utf-8", errors="replace")


@dataclass
class WriteResult:
    """Results from a complete write run."""
    fixes: List[FixResult]
    files_scanned: int
    rejected: Dict[str, str] = field(default_factory=dict)
    dry_run: bool = False
    elapsed_seconds: float = 0.0

    @property
    def written(self) -> List[str]:
        """Paths whose content was (or, in a dry run, would be) replaced."""
        return sorted(fix.path for fix in self.fixes if fix.changed)

    @property
    def issues_fixed(self) -> int:
        return sum(len(fix.issues) for fix in self.fixes)


class Fixer:
    """
    Applies a rule set's fixes until the content is clean.

    Each pass applies every rule's fix in registration order, then
    rescans. A single rule's fix is only idempotent on its own, so one
    pass may leave work for another rule; passes repeat until the scan
    comes back empty. Failing to get there within ``max_iterations``
    raises ConvergenceError rather than writing a file that still has
    issues.
    """

    def __init__(self, engine: Optional[ScanEngine] = None, max_iterations: int = DEFAULT_MAX_ITERATIONS):
        self.engine = engine or ScanEngine()
        self.max_iterations = max_iterations

    @property
    def rules(self):
        return self.engine.rules

    def apply_rules(self, content: FileContent) -> FileContent:
        """Run one pass of every rule's fix, in registration order."""
        for rule in self.rules:
            content = rule.fix(content)
        return content

    def _resolve(self, content: FileContent) -> Tuple[FileContent, int]:
        remaining: List[Issue] = []
        for iteration in range(1, self.max_iterations + 1):
            content = self.apply_rules(content)
            remaining = self.engine.scan_content(content)
            if not remaining:
                return content, iteration
        raise ConvergenceError(content.path, self.max_iterations, remaining)

    def resolve(self, content: Union[FileContent, bytes]) -> FileContent:
        """
        Fix content until no rule reports an issue.

        Args:
            content: Content to fix.

        Returns:
            Fixed content; scanning it yields no issues.

        Raises:
            ConvergenceError: The rules did not settle within max_iterations.
        """
        if isinstance(content, bytes):
            content = FileContent(data=content)
        fixed, _ = self._resolve(content)
        return fixed

    def fix_file(self, file_path: str, dry_run: bool = False) -> Optional[FixResult]:
        """
        Fix a single file in place.

        Returns None when the file has no issues. In a dry run the fixed
        content is computed but not written.
        """
        logger.debug("Writing %s", file_path)
        content = self.engine.read_file(file_path)
        issues = self.engine.scan_content(content)
        if not issues:
            return None

        rule_ids = sorted({issue.rule_id for issue in issues})
        logger.debug("rules: %s -> %d issue(s): %s", file_path, len(issues), ", ".join(rule_ids))

        fixed, iterations = self._resolve(content)
        result = FixResult(
            path=file_path,
            original=content.data,
            fixed=fixed.data,
            issues=issues,
            iterations=iterations,
        )

        if result.changed and not dry_run:
            self.write_file(file_path, fixed.data)
            logger.debug("write: applied to %s", file_path)

        return result

    def write_file(self, file_path: str, data: bytes) -> None:
        """
        Replace a file's bytes atomically.

        The new content goes to a temporary file in the same directory,
        which then replaces the target in one rename. Readers see either
        the old bytes or the new ones. Symlinks are written through.
        """
        target = os.path.realpath(file_path)
        directory = os.path.dirname(target)
        try:
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".prosefmt-", suffix=".tmp")
        except OSError as e:
            raise FileAccessError.from_os_error(file_path, e) from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            shutil.copymode(target, tmp_path)
            os.replace(tmp_path, target)
        except BaseException as e:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            if isinstance(e, OSError):
                raise FileAccessError.from_os_error(file_path, e) from e
            raise

    def write(self, paths: Sequence[str], dry_run: bool = False) -> WriteResult:
        """
        Fix every text file under the given paths.

        Args:
            paths: Files or directories to fix.
            dry_run: Compute fixes without writing them.

        Returns:
            WriteResult with one FixResult per file that had issues,
            sorted by path.
        """
        start_time = time.time()
        discovery = self.engine.discover(paths)

        results = map_in_order(
            lambda p: self.fix_file(p, dry_run=dry_run),
            discovery.accepted,
            self.engine.max_workers,
        )
        fixes = sorted((r for r in results if r is not None), key=lambda r: r.path)

        return WriteResult(
            fixes=fixes,
            files_scanned=len(discovery.accepted),
            rejected=discovery.rejected,
            dry_run=dry_run,
            elapsed_seconds=round(time.time() - start_time, 3),
        )
