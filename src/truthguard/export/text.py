"""Plain-text export, one line per finding plus indented suggestions."""

from __future__ import annotations

from truthguard.analysis.schemas import Finding, LintReport


def format_finding(finding: Finding) -> str:
    """``path:line:col: messageId message (kind, confidence%)``."""
    return (
        f"{finding.file_path}:{finding.line}:{finding.column + 1}: "
        f"{finding.message_id} {finding.message} "
        f"({finding.kind}, {finding.confidence}%)"
    )


def export_text(report: LintReport) -> str:
    """Export a lint report as human-readable text."""
    lines: list[str] = []
    for file_report in report.files:
        if file_report.has_syntax_errors:
            lines.append(
                f"{file_report.file_path}: warning: file has syntax errors"
            )
        if file_report.fix_skipped:
            lines.append(
                f"{file_report.file_path}: warning: fixes not applied "
                f"({file_report.fix_skipped})"
            )
        for finding in file_report.findings:
            lines.append(format_finding(finding))
            for alt in finding.alternatives:
                lines.append(f"    - {alt.description}")

    for skipped in report.skipped:
        lines.append(f"{skipped.file_path}: skipped ({skipped.reason})")

    total = report.finding_count
    fixable = sum(f.fixable_count for f in report.files)
    file_count = len(report.files)
    noun = "problem" if total == 1 else "problems"
    summary = f"{total} {noun} in {file_count} file(s)"
    if fixable:
        summary += f", {fixable} fixable with --fix"
    lines.append(summary)
    return "\n".join(lines) + "\n"
