"""Tests for text and JSON report export."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from truthguard.analysis.schemas import LintReport, SkippedFile
from truthguard.export import export_report
from truthguard.export.json_export import export_json
from truthguard.export.text import export_text, format_finding
from truthguard.services.lint_service import lint_source


def _report() -> LintReport:
    file_report = lint_source(
        "if ([]) {}\nif (new Set([x])) {}\n", file_path="src/a.js"
    )
    return LintReport(
        files=[file_report],
        skipped=[SkippedFile(file_path=Path("dist/b.js"), reason="skipped dir")],
    )


class TestTextExport:
    def test_finding_line(self) -> None:
        finding = _report().files[0].findings[0]
        assert format_finding(finding) == (
            "src/a.js:1:5: arrayTruthy Arrays are always truthy in "
            "JavaScript, even when empty. Use '[].length > 0' to check "
            "for items. (array, 100%)"
        )

    def test_alternatives_and_summary(self) -> None:
        text = export_text(_report())
        assert "    - Check the element directly: if (x)" in text
        assert "dist/b.js: skipped (skipped dir)" in text
        assert text.rstrip().endswith("2 problems in 1 file(s), 1 fixable with --fix")

    def test_clean_report(self) -> None:
        assert export_text(LintReport()) == "0 problems in 0 file(s)\n"

    def test_syntax_error_warning(self) -> None:
        report = LintReport(files=[lint_source("if (", file_path="x.js")])
        assert "x.js: warning: file has syntax errors" in export_text(report)

    def test_skipped_fix_warning(self) -> None:
        file_report = lint_source("if ([]) {}", file_path="x.js").model_copy(
            update={"fix_skipped": "not valid UTF-8 at byte 6"}
        )
        text = export_text(LintReport(files=[file_report]))
        assert (
            "x.js: warning: fixes not applied (not valid UTF-8 at byte 6)"
        ) in text


class TestJsonExport:
    def test_envelope(self) -> None:
        payload = json.loads(export_json(_report()))
        assert payload["tool"] == "truthguard"
        assert payload["finding_count"] == 2
        assert payload["skipped"] == [
            {"file_path": "dist/b.js", "reason": "skipped dir"}
        ]
        (file_entry,) = payload["files"]
        assert file_entry["file_path"] == "src/a.js"
        first, second = file_entry["findings"]
        assert first["message_id"] == "arrayTruthy"
        assert first["fix"]["replacement"] == "[].length > 0"
        assert second["specialized"] is True
        assert second["fix"] is None
        assert len(second["alternatives"]) == 3


class TestDispatch:
    def test_formats(self) -> None:
        report = _report()
        assert export_report(report, "text") == export_text(report)
        assert export_report(report, "json") == export_json(report)

    def test_unknown_format(self) -> None:
        with pytest.raises(ValueError, match="Unsupported format: sarif"):
            export_report(LintReport(), "sarif")
