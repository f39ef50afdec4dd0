"""Lint JavaScript/TypeScript sources for truthy collection checks.

Ties the pieces together: parse, walk boolean positions, classify each
node, ask the advisor, and convert diagnoses into located findings.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import tree_sitter

from truthguard.analysis.advisor import advise
from truthguard.analysis.classifier import classify
from truthguard.analysis.nodes import node_text
from truthguard.analysis.oracle import DeclaredTypeOracle, TypeOracle
from truthguard.analysis.presets import preset_options
from truthguard.analysis.schemas import (
    AlternativeRecord,
    FileReport,
    Finding,
    FixRecord,
    LintReport,
    RuleOptions,
    SkippedFile,
)
from truthguard.analysis.value_objects import Diagnosis, Fix, Vocabulary
from truthguard.analysis.visitor import find_boolean_positions
from truthguard.analysis.vocabulary import DEFAULT_VOCABULARY
from truthguard.config import TYPED_LANGUAGES, Settings
from truthguard.errors import TruthguardError, UnsupportedLanguageError
from truthguard.ingestion.file_walker import collect_files
from truthguard.ingestion.parser import language_for_path, parse_source

logger = logging.getLogger(__name__)


def lint_source(
    source: str,
    language: str = "javascript",
    options: RuleOptions | None = None,
    *,
    vocabulary: Vocabulary | None = None,
    oracle: TypeOracle | None = None,
    file_path: str = "<input>",
) -> FileReport:
    """Lint one source string and return its findings in source order."""
    opts = options or RuleOptions()
    vocab = vocabulary or DEFAULT_VOCABULARY
    data = source.encode("utf-8")
    tree = parse_source(data, language)

    has_errors = tree.root_node.has_error
    if has_errors:
        logger.warning(
            "event=syntax_errors file=%s language=%s", file_path, language
        )

    findings: list[Finding] = []
    seen: set[tuple[int, int]] = set()
    for node, position in find_boolean_positions(tree.root_node):
        span = (node.start_byte, node.end_byte)
        if span in seen:
            continue
        seen.add(span)

        classification = classify(node, opts, oracle, vocab)
        outcome = advise(node, classification, position, opts)
        if isinstance(outcome, Diagnosis):
            findings.append(_to_finding(node, outcome, data, file_path))
        elif outcome is not None:
            logger.debug(
                "event=suppressed file=%s line=%d reason=%s",
                file_path,
                node.start_point[0] + 1,
                outcome.reason,
            )

    logger.debug(
        "event=source_linted file=%s findings=%d", file_path, len(findings)
    )
    return FileReport(
        file_path=file_path,
        language=language,
        findings=findings,
        has_syntax_errors=has_errors,
    )


def lint_file(
    path: Path,
    options: RuleOptions | None = None,
    settings: Settings | None = None,
) -> FileReport:
    """Lint a single file, picking grammar and oracle from its extension.

    Raises :class:`UnsupportedLanguageError` for non-JS/TS files and
    ``OSError`` when the file cannot be read.
    """
    cfg = settings or Settings()
    opts = options or preset_options(cfg.preset)
    language = language_for_path(path)
    if language is None:
        raise UnsupportedLanguageError(path.suffix or path.name)

    oracle: TypeOracle | None = None
    if cfg.use_type_annotations and language in TYPED_LANGUAGES:
        oracle = DeclaredTypeOracle()

    source = _read_file(path)
    return lint_source(
        source, language, opts, oracle=oracle, file_path=str(path)
    )


def fix_file(
    path: Path,
    options: RuleOptions | None = None,
    settings: Settings | None = None,
) -> FileReport:
    """Apply every primary fix in ``path`` and return the remaining findings.

    The file is only rewritten when at least one fix changed it. Files
    that are not valid UTF-8 are never rewritten, since undecodable bytes
    would not survive the round-trip.
    """
    report = lint_file(path, options, settings)
    if report.fixable_count == 0:
        return report

    try:
        source = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as exc:
        reason = f"not valid UTF-8 at byte {exc.start}"
        logger.warning("event=fix_skipped file=%s reason=%s", path, reason)
        return report.model_copy(update={"fix_skipped": reason})

    fixed = apply_fixes(source, report.findings)
    if fixed == source:
        return report

    path.write_text(fixed, encoding="utf-8", newline="")
    logger.info(
        "event=file_fixed file=%s fixes=%d", path, report.fixable_count
    )
    remaining = lint_file(path, options, settings)
    return remaining.model_copy(update={"fixed": True})


def lint_paths(
    paths: Iterable[Path],
    options: RuleOptions | None = None,
    settings: Settings | None = None,
    *,
    fix: bool = False,
) -> LintReport:
    """Lint files and directories; one bad file never aborts the batch."""
    cfg = settings or Settings()
    opts = options or preset_options(cfg.preset)
    files, rejected = collect_files(paths, cfg)

    report = LintReport(
        skipped=[
            SkippedFile(file_path=p, reason=reason) for p, reason in rejected
        ]
    )
    for path in files:
        try:
            if fix:
                file_report = fix_file(path, opts, cfg)
            else:
                file_report = lint_file(path, opts, cfg)
        except (TruthguardError, OSError) as exc:
            logger.warning("event=file_skipped file=%s error=%s", path, exc)
            report.skipped.append(SkippedFile(file_path=path, reason=str(exc)))
            continue
        report.files.append(file_report)

    logger.info(
        "event=lint_complete files=%d findings=%d skipped=%d",
        len(report.files),
        report.finding_count,
        len(report.skipped),
    )
    return report


def apply_fixes(source: str, findings: Iterable[Finding]) -> str:
    """Apply primary fixes back-to-front, skipping any that overlap.

    Fixes are applied in ascending start order; a fix that overlaps one
    already accepted is dropped.
    """
    fixes = sorted(
        (f.fix for f in findings if f.fix is not None),
        key=lambda fx: (fx.start_byte, fx.end_byte),
    )
    accepted: list[FixRecord] = []
    last_end = -1
    for fx in fixes:
        if fx.start_byte < last_end:
            logger.debug(
                "event=fix_overlap start=%d end=%d", fx.start_byte, fx.end_byte
            )
            continue
        accepted.append(fx)
        last_end = fx.end_byte

    data = source.encode("utf-8")
    for fx in reversed(accepted):
        data = (
            data[: fx.start_byte]
            + fx.replacement.encode("utf-8")
            + data[fx.end_byte :]
        )
    return data.decode("utf-8")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _to_finding(
    node: tree_sitter.Node, diagnosis: Diagnosis, data: bytes, file_path: str
) -> Finding:
    start_row, _ = node.start_point
    end_row, _ = node.end_point
    return Finding(
        file_path=file_path,
        line=start_row + 1,
        column=_char_column(data, node.start_byte),
        end_line=end_row + 1,
        end_column=_char_column(data, node.end_byte),
        source_text=node_text(node),
        message_id=diagnosis.message_id,
        message=diagnosis.message,
        kind=diagnosis.kind,
        confidence=diagnosis.confidence,
        evidence=diagnosis.evidence,
        suggested_rewrite=diagnosis.suggested_rewrite,
        specialized=diagnosis.specialized,
        fix=_fix_record(diagnosis.fix),
        alternatives=[
            AlternativeRecord(
                description=alt.description,
                rewrite=alt.rewrite,
                fix=FixRecord(
                    start_byte=alt.fix.start_byte,
                    end_byte=alt.fix.end_byte,
                    replacement=alt.fix.replacement,
                ),
            )
            for alt in diagnosis.alternatives
        ],
    )


def _fix_record(fix: Fix | None) -> FixRecord | None:
    if fix is None:
        return None
    return FixRecord(
        start_byte=fix.start_byte,
        end_byte=fix.end_byte,
        replacement=fix.replacement,
    )


def _char_column(data: bytes, byte_offset: int) -> int:
    """Character (not byte) column of an offset within its line."""
    line_start = data.rfind(b"\n", 0, byte_offset) + 1
    return len(data[line_start:byte_offset].decode("utf-8", errors="replace"))


def _read_file(path: Path) -> str:
    """Read a file as UTF-8 text, replacing undecodable bytes."""
    with open(path, encoding="utf-8", errors="replace", newline="") as f:
        return f.read()
