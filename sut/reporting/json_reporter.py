"""JSON report generator for selective unit test runs.

Generates structured JSON reports from a ReportModel.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from .report import ReportModel

if TYPE_CHECKING:
    from ..runner.executor import BlockFailure


class JsonReporter:
    """Generates JSON reports from unit test results."""

    def generate(
        self,
        report: ReportModel,
        failures: Optional[list[BlockFailure]] = None,
    ) -> dict[str, Any]:
        """Generate a JSON report from a run report.

        Args:
            report: Report model of the finished run.
            failures: Failed blocks collected by the executor.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        aggregate = report.aggregate

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "mode": report.mode.value,
            "status": "passed" if report.success else "failed",
            "selections": report.selections.to_dict(),
            "summary": {
                "found": aggregate.found,
                "passed": aggregate.passing,
                "failed": aggregate.failing,
                "skipped": aggregate.skipped,
                "elapsed_ms": int(report.elapsed * 1000),
            },
            "modules": [
                {
                    "name": item.name,
                    "found": item.found,
                    "passed": item.passing,
                    "failed": item.failing,
                    "elapsed_ms": int(item.elapsed * 1000),
                    "prologue": item.uses_hook,
                }
                for item in report.modules
            ],
            "modules_with_tests": list(aggregate.modules_with_tests),
            "modules_without_tests": list(aggregate.modules_without_tests),
            "modules_excluded": list(aggregate.modules_excluded),
            "modules_without_prologue": list(aggregate.modules_without_hook),
            "failures": [
                {
                    "module": f.module,
                    "name": f.name,
                    "line": f.line,
                    "message": f.message,
                }
                for f in failures or []
            ],
        }

    def save(self, report: dict[str, Any], path: Path) -> Path:
        """Save report to a JSON file.

        Args:
            report: Report dictionary.
            path: Output file path.

        Returns:
            Path to the saved file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        return path

    def to_json_string(self, report: dict[str, Any], pretty: bool = True) -> str:
        if pretty:
            return json.dumps(report, indent=2, ensure_ascii=False)
        return json.dumps(report, ensure_ascii=False)

    def generate_flow_output(
        self,
        report: dict[str, Any],
        report_path: Optional[str] = None,
    ) -> dict[str, Any]:
        """Generate flow CLI compatible JSON output.

        {
            "success": bool,
            "command": "test",
            "data": { ... },
            "message": str
        }
        """
        summary = report["summary"]
        all_passed = report["status"] == "passed"

        data: dict[str, Any] = {
            "mode": report["mode"],
            "total_tests": summary["found"],
            "passed": summary["passed"],
            "failed": summary["failed"],
            "skipped": summary["skipped"],
            "duration_ms": summary["elapsed_ms"],
        }

        if report_path:
            data["report_path"] = report_path

        if not all_passed:
            message = f"{summary['failed']} of {summary['found']} unit tests failed"
        elif summary["skipped"]:
            message = f"All selected unit tests passed ({summary['skipped']} skipped)"
        else:
            message = "All unit tests passed"

        return {
            "success": all_passed,
            "command": "test",
            "data": data,
            "message": message,
        }
