"""
SARIF output formatter for IDE and code-review integration.

SARIF (Static Analysis Results Interchange Format) is a standard
format for static analysis tool output, supported by many IDEs
and code review tools.
"""

import json
from typing import Any, Dict, List, Optional

from prosefmt import __version__
from prosefmt.core.issues import Issue, ScanResult, aggregate_issues
from prosefmt.core.rules import RuleSet


class SARIFFormatter:
    """
    Formats check results in SARIF format.

    SARIF is supported by:
    - GitHub Code Scanning
    - VS Code SARIF Viewer
    - Azure DevOps
    """

    SARIF_VERSION = "2.1.0"
    SCHEMA_URI = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"

    def __init__(self, rules: Optional[RuleSet] = None):
        self.rules = rules

    def format_result(self, result: ScanResult) -> str:
        """Format a complete check result in SARIF format."""
        sarif = {
            "$schema": self.SCHEMA_URI,
            "version": self.SARIF_VERSION,
            "runs": [self._create_run(result)],
        }
        return json.dumps(sarif, indent=2) + "\n"

    def _create_run(self, result: ScanResult) -> Dict[str, Any]:
        """Create a SARIF run object."""
        issues = aggregate_issues(result.issues)
        return {
            "tool": self._create_tool(self._collect_rules(issues)),
            "results": [self._create_result(issue) for issue in issues],
            "invocations": [{"executionSuccessful": True}],
        }

    def _create_tool(self, rules: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Create a SARIF tool object."""
        return {
            "driver": {
                "name": "prosefmt",
                "version": __version__,
                "rules": rules,
            }
        }

    def _collect_rules(self, issues: List[Issue]) -> List[Dict[str, Any]]:
        """Describe every known rule, plus any rule id seen only in issues."""
        descriptors = []
        seen = set()

        if self.rules is not None:
            for rule in self.rules:
                meta = rule.metadata
                seen.add(meta.rule_id)
                descriptors.append({
                    "id": meta.rule_id,
                    "name": meta.name,
                    "shortDescription": {"text": meta.message},
                    "fullDescription": {"text": meta.description},
                    "defaultConfiguration": {"level": "warning"},
                })

        for issue in issues:
            if issue.rule_id not in seen:
                seen.add(issue.rule_id)
                descriptors.append({
                    "id": issue.rule_id,
                    "shortDescription": {"text": issue.message},
                    "defaultConfiguration": {"level": "warning"},
                })

        return descriptors

    def _create_result(self, issue: Issue) -> Dict[str, Any]:
        """Create a SARIF result object from an issue."""
        return {
            "ruleId": issue.rule_id,
            "level": "warning",
            "message": {
                "text": issue.message,
            },
            "locations": [
                {
                    "physicalLocation": {
                        "artifactLocation": {
                            "uri": issue.file,
                        },
                        "region": {
                            "startLine": issue.line,
                            "startColumn": issue.column,
                        },
                    },
                }
            ],
        }
