"""Exception hierarchy for structured error handling.

Only the outer layers raise these: the classifier and advisor never
raise for unrecognized input, they return a ``none`` classification.
"""

from __future__ import annotations

from pydantic import ValidationError


class TruthguardError(Exception):
    """Base class for all truthguard errors."""


class UnsupportedLanguageError(TruthguardError):
    """No grammar mapping exists for the file or language name."""

    def __init__(self, language: str) -> None:
        super().__init__(f"unsupported language: {language}")
        self.language = language


class GrammarUnavailableError(TruthguardError):
    """The tree-sitter grammar package for a language cannot be loaded."""

    def __init__(self, language: str, module_name: str) -> None:
        super().__init__(
            f"grammar for {language} is not installed "
            f"(missing module {module_name})"
        )
        self.language = language
        self.module_name = module_name


class InvalidOptionsError(TruthguardError):
    """Rule options or preset name failed validation."""

    @classmethod
    def from_validation_error(
        cls, error: ValidationError
    ) -> InvalidOptionsError:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in e['loc']) or 'options'}: {e['msg']}"
            for e in error.errors()
        )
        return cls(f"invalid rule options: {problems}")
