"""Shared test fixtures: parsing helpers and a clean environment."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest
import tree_sitter

from truthguard.analysis.nodes import node_text
from truthguard.analysis.visitor import find_boolean_positions
from truthguard.ingestion.parser import parse_source

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"
SAMPLE_REPO = FIXTURE_DIR / "sample_repo"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep TRUTHGUARD_* variables from the shell out of Settings()."""
    for key in list(os.environ):
        if key.startswith("TRUTHGUARD_"):
            monkeypatch.delenv(key)


def find_node(
    root: tree_sitter.Node, node_type: str, text: str | None = None
) -> tree_sitter.Node:
    """First node in pre-order with the given type (and source text)."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == node_type and (text is None or node_text(node) == text):
            return node
        stack.extend(reversed(node.children))
    msg = f"no {node_type} node{f' {text!r}' if text else ''} found"
    raise LookupError(msg)


@pytest.fixture
def parse() -> Callable[..., tree_sitter.Node]:
    """Parse source and return the root node."""

    def _parse(source: str, language: str = "javascript") -> tree_sitter.Node:
        return parse_source(source, language).root_node

    return _parse


@pytest.fixture
def condition() -> Callable[..., tree_sitter.Node]:
    """Parse ``if (<expr>) {}`` and return the test expression."""

    def _condition(expr: str, language: str = "javascript") -> tree_sitter.Node:
        root = parse_source(f"if ({expr}) {{}}", language).root_node
        node, _ = next(find_boolean_positions(root))
        return node

    return _condition


@pytest.fixture
def node_in() -> Callable[..., tree_sitter.Node]:
    """Parse ``source`` and return the first node of a type and text."""

    def _node_in(
        source: str,
        node_type: str,
        text: str | None = None,
        language: str = "javascript",
    ) -> tree_sitter.Node:
        root = parse_source(source, language).root_node
        return find_node(root, node_type, text)

    return _node_in
