"""
prosefmt

Finds and fixes text hygiene problems (trailing whitespace, missing or
extra final newlines) in any text file, working on raw bytes so it is
safe for every encoding.
"""

__version__ = "1.0.0"

from prosefmt.core.engine import ScanEngine
from prosefmt.core.issues import Issue, ScanResult
from prosefmt.core.rules import Rule, RuleSet
from prosefmt.config import ProsefmtConfig
from prosefmt.remediation import Fixer

__all__ = [
    "ScanEngine",
    "Issue",
    "ScanResult",
    "Rule",
    "RuleSet",
    "ProsefmtConfig",
    "Fixer",
]
