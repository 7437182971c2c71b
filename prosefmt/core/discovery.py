"""
File discovery.

Expands the paths given on the command line into a de-duplicated list
of regular files, then splits that list into accepted text files and
rejected ones.
"""

import fnmatch
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from prosefmt.core.classifier import SAMPLE_SIZE, classify
from prosefmt.errors import FileAccessError
from prosefmt.utils import map_in_order, normalize_path


logger = logging.getLogger(__name__)

# Version control metadata is never formatted.
DEFAULT_EXCLUDE_PATTERNS = [
    ".git",
    ".hg",
    ".svn",
]


@dataclass
class Discovery:
    """Accepted text files in discovery order, and rejected files with a reason."""
    accepted: List[str] = field(default_factory=list)
    rejected: Dict[str, str] = field(default_factory=dict)


def is_excluded(path: str, base_path: str, patterns: Sequence[str]) -> bool:
    """Check a path against exclude patterns by relative path and base name."""
    rel_path = os.path.relpath(path, base_path)
    name = os.path.basename(path)
    for pattern in patterns:
        if fnmatch.fnmatch(rel_path, pattern) or fnmatch.fnmatch(name, pattern):
            return True
    return False


def _walk(root: str, exclude_patterns: Sequence[str]) -> List[str]:
    found = []

    def on_error(error: OSError) -> None:
        raise FileAccessError.from_os_error(error.filename or root, error)

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        # Sorting in place also fixes the order os.walk descends in.
        dirnames[:] = sorted(
            d for d in dirnames
            if not is_excluded(os.path.join(dirpath, d), root, exclude_patterns)
        )
        for name in sorted(filenames):
            path = os.path.normpath(os.path.join(dirpath, name))
            if is_excluded(path, root, exclude_patterns):
                continue
            if os.path.isfile(path):
                found.append(path)
    return found


def discover_files(
    paths: Sequence[str],
    exclude_patterns: Optional[Sequence[str]] = None,
) -> List[str]:
    """
    Expand paths into a list of regular files.

    Every given path must exist. Directories are walked recursively in
    lexical order. A file reachable through several arguments is kept
    only at its first occurrence.
    """
    if exclude_patterns is None:
        exclude_patterns = DEFAULT_EXCLUDE_PATTERNS

    files: List[str] = []
    seen = set()

    def add(path: str) -> None:
        key = normalize_path(path)
        if key in seen:
            return
        seen.add(key)
        files.append(path)

    for root in paths:
        if not os.path.exists(root):
            raise FileAccessError(root, "no such file or directory")
        if os.path.isdir(root):
            for path in _walk(root, exclude_patterns):
                add(path)
        elif os.path.isfile(root):
            add(root)
        else:
            logger.debug("scanner: skipping %s (not a regular file)", root)

    return files


def classify_files(
    paths: Sequence[str],
    sample_size: int = SAMPLE_SIZE,
    max_workers: int = 1,
) -> Discovery:
    """Classify each file, dropping the ones that cannot be read."""
    classifications = map_in_order(lambda p: classify(p, sample_size), paths, max_workers)

    discovery = Discovery()
    for path, classification in zip(paths, classifications):
        if classification.accepted:
            discovery.accepted.append(path)
        elif classification.rejected:
            discovery.rejected[path] = classification.reason
    return discovery
