"""
Main scanning engine for prosefmt.

This module orchestrates a read-only check run: discovering files,
classifying them as text or binary, running every rule over each text
file and aggregating the issues into a stable order.
"""

import logging
import time
from typing import List, Optional, Sequence, Union

from prosefmt.core.classifier import SAMPLE_SIZE
from prosefmt.core.content import FileContent
from prosefmt.core.discovery import (
    DEFAULT_EXCLUDE_PATTERNS, Discovery, classify_files, discover_files
)
from prosefmt.core.issues import Issue, ScanResult, aggregate_issues, file_order_key
from prosefmt.core.rules import RuleSet
from prosefmt.errors import FileAccessError
from prosefmt.utils import map_in_order


logger = logging.getLogger(__name__)


class ScanEngine:
    """
    Runs a rule set over files.

    The engine:
    1. Expands directories and removes duplicate paths
    2. Classifies each file as text or binary
    3. Runs every rule on each text file
    4. Collects issues in a stable order

    Files are processed independently on a pool of ``max_workers``
    threads; the rule set is shared read-only between them.
    """

    def __init__(
        self,
        rules: Optional[RuleSet] = None,
        max_workers: int = 4,
        sample_size: int = SAMPLE_SIZE,
        exclude_patterns: Optional[Sequence[str]] = None,
    ):
        if rules is None:
            from prosefmt.rules import default_rule_set
            rules = default_rule_set()
        self.rules = rules
        self.max_workers = max_workers
        self.sample_size = sample_size
        self.exclude_patterns = list(
            DEFAULT_EXCLUDE_PATTERNS if exclude_patterns is None else exclude_patterns
        )

    def scan_content(
        self,
        content: Union[FileContent, bytes],
        file_path: str = "<stdin>",
    ) -> List[Issue]:
        """
        Scan content directly without reading from a file.

        Every rule checks the same snapshot. Issues are ordered by line,
        column, then rule id.
        """
        if isinstance(content, bytes):
            content = FileContent(data=content, path=file_path)

        issues: List[Issue] = []
        for rule in self.rules:
            issues.extend(rule.check(content))
        issues.sort(key=file_order_key)
        return issues

    def read_file(self, file_path: str) -> FileContent:
        """Read a file's contents. Any I/O failure is fatal."""
        try:
            return FileContent.read(file_path)
        except OSError as e:
            raise FileAccessError.from_os_error(file_path, e) from e

    def scan_file(self, file_path: str) -> List[Issue]:
        """Scan a single file and return its issues."""
        issues = self.scan_content(self.read_file(file_path))
        if issues:
            rule_ids = sorted({issue.rule_id for issue in issues})
            logger.debug("rules: %s -> %d issue(s): %s", file_path, len(issues), ", ".join(rule_ids))
        return issues

    def discover(self, paths: Sequence[str]) -> Discovery:
        """Expand and classify paths, logging every decision."""
        files = discover_files(paths, self.exclude_patterns)
        discovery = classify_files(files, self.sample_size, self.max_workers)

        prefix = "" if discovery.accepted else "No text files found. "
        logger.debug(
            "%sScanned %d text file(s), skipped %d path(s).",
            prefix, len(discovery.accepted), len(discovery.rejected),
        )
        for path in sorted(discovery.rejected):
            logger.debug("scanner: rejected %s (reason: %s)", path, discovery.rejected[path])
        for path in discovery.accepted:
            logger.debug("scanner: accepted %s", path)

        return discovery

    def _check_file(self, file_path: str) -> List[Issue]:
        logger.debug("Checking %s", file_path)
        return self.scan_file(file_path)

    def check(self, paths: Sequence[str]) -> ScanResult:
        """
        Check paths and return results without modifying anything.

        Args:
            paths: Files or directories to check.

        Returns:
            ScanResult with issues in report order.
        """
        start_time = time.time()
        discovery = self.discover(paths)

        per_file = map_in_order(self._check_file, discovery.accepted, self.max_workers)
        issues = aggregate_issues(issue for file_issues in per_file for issue in file_issues)

        return ScanResult(
            issues=issues,
            files_scanned=len(discovery.accepted),
            rejected=discovery.rejected,
            elapsed_seconds=round(time.time() - start_time, 3),
        )


def create_engine(config=None) -> ScanEngine:
    """
    Create a scan engine from a ProsefmtConfig.

    Args:
        config: Optional configuration; defaults are used when omitted.

    Returns:
        Configured ScanEngine instance.
    """
    from prosefmt.config import ProsefmtConfig
    from prosefmt.rules import default_rule_set

    if config is None:
        config = ProsefmtConfig()

    rules = default_rule_set().select(
        enabled=config.rules.enabled,
        disabled=config.rules.disabled,
    )
    return ScanEngine(
        rules=rules,
        max_workers=config.max_workers,
        sample_size=config.sample_size,
        exclude_patterns=config.exclude_patterns,
    )
