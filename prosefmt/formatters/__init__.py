"""
Output formatters for check and write results.

Provides multiple output formats including:
- Compact one-line-per-issue text
- JSON for machine processing
- SARIF for IDE integration
"""

from typing import Optional

from prosefmt.core.rules import RuleSet
from prosefmt.formatters.compact import CompactFormatter
from prosefmt.formatters.json_formatter import JSONFormatter
from prosefmt.formatters.sarif import SARIFFormatter

__all__ = [
    "CompactFormatter",
    "JSONFormatter",
    "SARIFFormatter",
    "get_formatter",
]


def get_formatter(format_name: str, rules: Optional[RuleSet] = None, use_color: bool = False):
    """Get a formatter by name."""
    name = format_name.lower()
    if name in ("compact", "text"):
        return CompactFormatter(use_color=use_color)
    if name == "json":
        return JSONFormatter()
    if name == "sarif":
        return SARIFFormatter(rules=rules)

    raise ValueError(f"Unknown format: {format_name}")
