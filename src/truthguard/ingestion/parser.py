"""Parse JavaScript/TypeScript source into tree-sitter trees."""

from __future__ import annotations

import importlib
from pathlib import Path

import tree_sitter

from truthguard.config import EXTENSION_MAP, GRAMMAR_MODULES
from truthguard.errors import GrammarUnavailableError, UnsupportedLanguageError


def language_for_path(path: Path) -> str | None:
    """Language name for a file extension, or None if not lintable."""
    return EXTENSION_MAP.get(path.suffix.lower())


def parse_source(source: str | bytes, language: str) -> tree_sitter.Tree:
    """Parse ``source`` with the grammar for ``language``.

    Raises :class:`UnsupportedLanguageError` for unknown languages and
    :class:`GrammarUnavailableError` when the grammar package is missing.
    """
    parser = get_parser(language)
    data = source.encode("utf-8") if isinstance(source, str) else source
    return parser.parse(data)


# ---------------------------------------------------------------------------
# Parser cache
# ---------------------------------------------------------------------------

_parser_cache: dict[str, tree_sitter.Parser] = {}


def get_parser(language: str) -> tree_sitter.Parser:
    """Get or create a cached tree-sitter parser for the language."""
    if language in _parser_cache:
        return _parser_cache[language]

    spec = GRAMMAR_MODULES.get(language)
    if spec is None:
        raise UnsupportedLanguageError(language)
    module_name, factory = spec

    try:
        mod = importlib.import_module(module_name)
        capsule: object = getattr(mod, factory)()
    except (ImportError, AttributeError) as exc:
        raise GrammarUnavailableError(language, module_name) from exc

    lang = tree_sitter.Language(capsule)
    parser = tree_sitter.Parser(lang)
    _parser_cache[language] = parser
    return parser
