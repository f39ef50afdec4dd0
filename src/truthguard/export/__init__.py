"""Export module: render lint reports for terminals and tools."""

from collections.abc import Callable

from truthguard.analysis.schemas import LintReport
from truthguard.constants import ReportFormat
from truthguard.export.json_export import export_json
from truthguard.export.text import export_text, format_finding

__all__ = [
    "export_json",
    "export_report",
    "export_text",
    "format_finding",
]

_REPORT_EXPORTERS: dict[str, Callable[[LintReport], str]] = {
    ReportFormat.TEXT: export_text,
    ReportFormat.JSON: export_json,
}


def export_report(report: LintReport, fmt: str = "text") -> str:
    """Dispatch export for a lint report by format string."""
    exporter = _REPORT_EXPORTERS.get(fmt)
    if exporter is None:
        valid = ", ".join(_REPORT_EXPORTERS)
        msg = f"Unsupported format: {fmt}. Use: {valid}"
        raise ValueError(msg)
    return exporter(report)
