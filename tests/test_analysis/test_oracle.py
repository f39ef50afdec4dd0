"""Tests for the oracle boundary and the declared-type oracle."""

from __future__ import annotations

import logging
from collections.abc import Callable

import pytest
import tree_sitter

from truthguard.analysis.classifier import classify
from truthguard.analysis.oracle import DeclaredTypeOracle, query_oracle
from truthguard.analysis.value_objects import TypeFacts
from truthguard.constants import CollectionKind, Evidence

NodeIn = Callable[..., tree_sitter.Node]


def _test_expr(node_in: NodeIn, source: str) -> tree_sitter.Node:
    """The expression inside the last ``if (...)`` of a TS snippet."""
    stmt = node_in(source, "if_statement", language="typescript")
    cond = stmt.child_by_field_name("condition")
    assert cond is not None
    return cond.named_children[0]


class _Raising:
    def resolve_type(self, node: tree_sitter.Node) -> TypeFacts | None:
        raise TimeoutError("checker timed out")


class TestQueryOracle:
    def test_no_oracle(self, node_in: NodeIn) -> None:
        result = query_oracle(None, node_in("x", "identifier"))
        assert result.facts is None
        assert result.error is None

    def test_exception_becomes_unavailable(
        self, node_in: NodeIn, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="truthguard.analysis.oracle"):
            result = query_oracle(_Raising(), node_in("x", "identifier"))
        assert result.facts is None
        assert result.error == "TimeoutError: checker timed out"
        assert "event=oracle_failed" in caplog.text


class TestDeclaredTypeOracle:
    @pytest.mark.parametrize(
        ("source", "kind"),
        [
            ("const xs: string[] = load();\nif (xs) {}", CollectionKind.ARRAY),
            (
                "const xs: readonly number[] = load();\nif (xs) {}",
                CollectionKind.ARRAY,
            ),
            ("let pair: [string, number];\nif (pair) {}", CollectionKind.ARRAY),
            (
                "const xs: Array<string> = load();\nif (xs) {}",
                CollectionKind.ARRAY,
            ),
            (
                "const seen: Set<string> = load();\nif (seen) {}",
                CollectionKind.ARRAYLIKE,
            ),
            (
                "const byId: Record<string, User> = {};\nif (byId) {}",
                CollectionKind.OBJECT,
            ),
            (
                "const opts: { a: number } = load();\nif (opts) {}",
                CollectionKind.OBJECT,
            ),
            (
                "function f(m: Map<string, number>) { if (m) {} }",
                CollectionKind.ARRAYLIKE,
            ),
            (
                "const xs: string[] | number[] = load();\nif (xs) {}",
                CollectionKind.ARRAY,
            ),
        ],
    )
    def test_collection_annotations(
        self, node_in: NodeIn, source: str, kind: CollectionKind
    ) -> None:
        expr = _test_expr(node_in, source)
        c = classify(expr, oracle=DeclaredTypeOracle())
        assert c.kind == kind
        assert c.evidence == Evidence.TYPE_ORACLE
        assert c.confidence == 100

    @pytest.mark.parametrize(
        "source",
        [
            "const xs: string[] | undefined = load();\nif (xs) {}",
            "const xs: string[] | null = load();\nif (xs) {}",
            "function f(xs?: string[]) { if (xs) {} }",
            "const n: number = 1;\nif (n) {}",
            "const xs = load();\nif (xs) {}",
            "const xs: string[] | Set<string> = load();\nif (xs) {}",
            "if (undeclared) {}",
        ],
    )
    def test_no_facts(self, node_in: NodeIn, source: str) -> None:
        expr = _test_expr(node_in, source)
        assert DeclaredTypeOracle().resolve_type(expr) is None

    def test_inner_scope_shadows_outer(self, node_in: NodeIn) -> None:
        source = (
            "const xs: string[] = [];\n"
            "function f() {\n"
            "  const xs: number = 0;\n"
            "  if (xs) {}\n"
            "}"
        )
        expr = _test_expr(node_in, source)
        assert DeclaredTypeOracle().resolve_type(expr) is None

    def test_outer_scope_is_visible(self, node_in: NodeIn) -> None:
        source = (
            "const xs: string[] = [];\n"
            "function f() {\n"
            "  if (xs) {}\n"
            "}"
        )
        expr = _test_expr(node_in, source)
        facts = DeclaredTypeOracle().resolve_type(expr)
        assert facts == TypeFacts(is_array=True)

    def test_non_identifier(self, node_in: NodeIn) -> None:
        expr = _test_expr(node_in, "if (a.b) {}")
        assert DeclaredTypeOracle().resolve_type(expr) is None
