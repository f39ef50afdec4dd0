"""Tests for grammar loading and parsing."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from truthguard.errors import GrammarUnavailableError, UnsupportedLanguageError
from truthguard.ingestion import parser as parser_mod
from truthguard.ingestion.parser import get_parser, language_for_path, parse_source


@pytest.mark.parametrize(
    ("name", "language"),
    [
        ("a.js", "javascript"),
        ("a.MJS", "javascript"),
        ("a.cjs", "javascript"),
        ("a.jsx", "javascript"),
        ("a.ts", "typescript"),
        ("a.mts", "typescript"),
        ("a.tsx", "tsx"),
        ("a.py", None),
        ("Makefile", None),
    ],
)
def test_language_for_path(name: str, language: str | None) -> None:
    assert language_for_path(Path(name)) == language


def test_parser_is_cached() -> None:
    assert get_parser("javascript") is get_parser("javascript")


@pytest.mark.parametrize("language", ["javascript", "typescript", "tsx"])
def test_parse_each_language(language: str) -> None:
    tree = parse_source("if (xs) { go(); }", language)
    assert tree.root_node.type == "program"
    assert not tree.root_node.has_error


def test_tsx_parses_jsx() -> None:
    tree = parse_source("const el = <List items={items} />;", "tsx")
    assert not tree.root_node.has_error


def test_parse_accepts_bytes() -> None:
    tree = parse_source(b"[]", "javascript")
    assert tree.root_node.child_count == 1


def test_syntax_errors_still_produce_a_tree() -> None:
    tree = parse_source("if ([] { broken", "javascript")
    assert tree.root_node.has_error


def test_unknown_language() -> None:
    with pytest.raises(UnsupportedLanguageError, match="unsupported language: cobol"):
        get_parser("cobol")


def test_missing_grammar_package() -> None:
    with (
        patch.dict(parser_mod._parser_cache, clear=True),
        patch.dict(
            parser_mod.GRAMMAR_MODULES,
            {"javascript": ("tree_sitter_not_installed", "language")},
        ),
        pytest.raises(GrammarUnavailableError) as exc_info,
    ):
        get_parser("javascript")
    assert exc_info.value.module_name == "tree_sitter_not_installed"
