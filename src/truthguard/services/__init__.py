"""Lint service: run the analysis over sources, files and directories."""

from truthguard.services.lint_service import (
    apply_fixes,
    fix_file,
    lint_file,
    lint_paths,
    lint_source,
)

__all__ = [
    "apply_fixes",
    "fix_file",
    "lint_file",
    "lint_paths",
    "lint_source",
]
