"""Pydantic models for rule options and lint output."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from truthguard.constants import CollectionKind, Evidence, MessageId
from truthguard.errors import InvalidOptionsError


class RuleOptions(BaseModel):
    """Caller-supplied rule configuration, immutable for a run.

    Accepts ESLint-style camelCase keys (``checkArrays``) as
    well as snake_case names. Unknown keys are rejected.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    check_arrays: bool = True
    check_objects: bool = True
    check_array_like: bool = True
    allow_explicit_boolean: bool = True
    strict_naming: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> RuleOptions:
        """Validate a raw options mapping (e.g. parsed JSON)."""
        try:
            return cls.model_validate(dict(data or {}))
        except ValidationError as exc:
            raise InvalidOptionsError.from_validation_error(exc) from exc

    def merged(self, **overrides: Any) -> RuleOptions:
        """Return a copy with the given fields replaced and revalidated."""
        data = self.model_dump()
        data.update(overrides)
        return RuleOptions.from_mapping(data)

    def should_check(self, kind: CollectionKind) -> bool:
        if kind == CollectionKind.ARRAY:
            return self.check_arrays
        if kind == CollectionKind.OBJECT:
            return self.check_objects
        if kind == CollectionKind.ARRAYLIKE:
            return self.check_array_like
        return False


class FixRecord(BaseModel):
    """A byte-range replacement in the linted source."""

    start_byte: int
    end_byte: int
    replacement: str


class AlternativeRecord(BaseModel):
    """One labelled suggestion attached to a finding."""

    description: str
    rewrite: str
    fix: FixRecord


class Finding(BaseModel):
    """A diagnosis located in a source file."""

    file_path: str
    line: int  # 1-based
    column: int  # 0-based
    end_line: int
    end_column: int
    source_text: str
    message_id: MessageId
    message: str
    kind: CollectionKind
    confidence: int
    evidence: Evidence
    suggested_rewrite: str
    specialized: bool = False
    fix: FixRecord | None = None
    alternatives: list[AlternativeRecord] = Field(
        default_factory=lambda: list[AlternativeRecord]()
    )


class FileReport(BaseModel):
    """All findings for one source file."""

    file_path: str
    language: str
    findings: list[Finding] = Field(default_factory=lambda: list[Finding]())
    has_syntax_errors: bool = False
    fixed: bool = False
    # Why --fix left the file alone despite fixable findings
    fix_skipped: str | None = None

    @property
    def fixable_count(self) -> int:
        return sum(1 for f in self.findings if f.fix is not None)


class SkippedFile(BaseModel):
    """A file the lint run did not analyze, with the reason."""

    file_path: Path
    reason: str


class LintReport(BaseModel):
    """Combined output of a lint run over one or more paths."""

    files: list[FileReport] = Field(
        default_factory=lambda: list[FileReport]()
    )
    skipped: list[SkippedFile] = Field(
        default_factory=lambda: list[SkippedFile]()
    )

    @property
    def findings(self) -> list[Finding]:
        return [f for report in self.files for f in report.findings]

    @property
    def finding_count(self) -> int:
        return sum(len(report.findings) for report in self.files)
