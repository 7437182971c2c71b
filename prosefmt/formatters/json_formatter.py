"""
JSON output formatter for machine-readable results.
"""

import json

from prosefmt.core.issues import ScanResult, aggregate_issues
from prosefmt.remediation.fixer import WriteResult


class JSONFormatter:
    """
    Formats results as JSON for machine consumption.
    """

    def __init__(self, indent: int = 2):
        self.indent = indent

    def format_result(self, result: ScanResult) -> str:
        """Format a complete check result as JSON."""
        data = result.to_dict()
        data["issues"] = [issue.to_dict() for issue in aggregate_issues(result.issues)]
        return json.dumps(data, indent=self.indent) + "\n"

    def format_write(self, result: WriteResult) -> str:
        """Format a write run as JSON."""
        data = {
            "summary": {
                "files_scanned": result.files_scanned,
                "files_written": len(result.written),
                "issues_fixed": result.issues_fixed,
                "dry_run": result.dry_run,
                "elapsed_seconds": result.elapsed_seconds,
            },
            "written": result.written,
            "fixes": [
                {
                    "path": fix.path,
                    "iterations": fix.iterations,
                    "issues": [issue.to_dict() for issue in fix.issues],
                }
                for fix in result.fixes
            ],
            "rejected": dict(sorted(result.rejected.items())),
        }
        return json.dumps(data, indent=self.indent) + "\n"
