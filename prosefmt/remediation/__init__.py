"""
Fix application: fixed-point resolution and atomic file rewrites.
"""

from prosefmt.remediation.fixer import (
    DEFAULT_MAX_ITERATIONS, FixResult, Fixer, WriteResult
)

__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "FixResult",
    "Fixer",
    "WriteResult",
]
