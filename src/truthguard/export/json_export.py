"""JSON export with a structured envelope."""

from __future__ import annotations

import json
from typing import Any

from truthguard import __version__
from truthguard.analysis.schemas import FileReport, LintReport


def export_json(report: LintReport) -> str:
    """Export a lint report as structured JSON."""
    payload: dict[str, Any] = {
        "tool": "truthguard",
        "version": __version__,
        "finding_count": report.finding_count,
        "files": [_file_to_dict(f) for f in report.files],
        "skipped": [
            {"file_path": str(s.file_path), "reason": s.reason}
            for s in report.skipped
        ],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _file_to_dict(file_report: FileReport) -> dict[str, Any]:
    """Convert a FileReport to a JSON-serializable dict."""
    return {
        "file_path": file_report.file_path,
        "language": file_report.language,
        "has_syntax_errors": file_report.has_syntax_errors,
        "fixed": file_report.fixed,
        "fix_skipped": file_report.fix_skipped,
        "findings": [
            f.model_dump(mode="json", exclude={"file_path"})
            for f in file_report.findings
        ],
    }
