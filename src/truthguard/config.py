"""Environment-based configuration and language tables."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

from truthguard.constants import Preset

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and TRUTHGUARD_* environment variables."""

    # Logging
    log_level: str = "INFO"

    # Rules
    preset: Preset = Preset.RECOMMENDED
    use_type_annotations: bool = True

    # File-skip safety net: generated code is never linted
    skip_directories: Annotated[list[str], NoDecode] = [
        "node_modules",
        "bower_components",
        "vendor",
        "dist",
        "build",
        "out",
        "coverage",
        ".next",
        ".nuxt",
        ".git",
    ]
    skip_file_globs: Annotated[list[str], NoDecode] = [
        "*.min.js",
        "*.min.mjs",
        "*.min.cjs",
        "*.bundle.js",
        "*.chunk.js",
    ]
    max_file_size_bytes: int = 1_048_576  # 1MB

    @field_validator("skip_directories", "skip_file_globs", mode="before")
    @classmethod
    def _parse_list(cls, v: Any) -> Any:
        """Accept comma-separated string or JSON array."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("skip_directories")
    @classmethod
    def _warn_duplicates(cls, v: list[str]) -> list[str]:
        seen: set[str] = set()
        dupes: list[str] = []
        for name in v:
            if name in seen:
                dupes.append(name)
            seen.add(name)
        if dupes:
            logger.warning(
                "Duplicate entries in TRUTHGUARD_SKIP_DIRECTORIES: %s",
                ", ".join(dupes),
            )
        return v

    @field_validator("max_file_size_bytes")
    @classmethod
    def _validate_max_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("max_file_size_bytes must be positive")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "TRUTHGUARD_",
        "extra": "ignore",
    }


# File extension → language name mapping
EXTENSION_MAP: dict[str, str] = {
    # JavaScript
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    # TypeScript
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

# Language name → (grammar module, language factory) for tree-sitter
GRAMMAR_MODULES: dict[str, tuple[str, str]] = {
    "javascript": ("tree_sitter_javascript", "language"),
    "typescript": ("tree_sitter_typescript", "language_typescript"),
    "tsx": ("tree_sitter_typescript", "language_tsx"),
}

# Languages whose trees carry type annotations
TYPED_LANGUAGES = frozenset({"typescript", "tsx"})
