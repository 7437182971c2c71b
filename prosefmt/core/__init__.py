"""Core classification, rule and scanning engine."""

from prosefmt.core.classifier import Classification, SAMPLE_SIZE, classify, classify_sample
from prosefmt.core.content import FileContent, Line
from prosefmt.core.issues import Issue, ScanResult, aggregate_issues
from prosefmt.core.rules import Rule, RuleMetadata, RuleSet
from prosefmt.core.engine import ScanEngine

__all__ = [
    "Classification",
    "SAMPLE_SIZE",
    "classify",
    "classify_sample",
    "FileContent",
    "Line",
    "Issue",
    "ScanResult",
    "aggregate_issues",
    "Rule",
    "RuleMetadata",
    "RuleSet",
    "ScanEngine",
]
