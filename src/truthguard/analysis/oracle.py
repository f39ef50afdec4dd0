"""Type oracle boundary.

An oracle is an optional collaborator that knows static types. The
classifier never talks to one directly: :func:`query_oracle` turns every
failure mode (no oracle, no answer, an exception) into an explicit
:class:`OracleResult` so classification can fall through to the
syntactic tiers.
"""

from __future__ import annotations

import logging
from typing import Protocol

import tree_sitter

from truthguard.analysis.nodes import field, named_children, node_text
from truthguard.analysis.scope import resolve_binding
from truthguard.analysis.value_objects import (
    ORACLE_UNAVAILABLE,
    OracleResult,
    TypeFacts,
)

logger = logging.getLogger(__name__)


class TypeOracle(Protocol):
    """Anything that can describe the static type of an expression.

    Return ``None`` when the type is unknown. Implementations may raise;
    callers go through :func:`query_oracle`.
    """

    def resolve_type(self, node: tree_sitter.Node) -> TypeFacts | None: ...


def query_oracle(
    oracle: TypeOracle | None, node: tree_sitter.Node
) -> OracleResult:
    """Ask the oracle about ``node`` without ever raising."""
    if oracle is None:
        return ORACLE_UNAVAILABLE
    try:
        facts = oracle.resolve_type(node)
    except Exception as exc:  # noqa: BLE001
        logger.debug(
            "event=oracle_failed node_type=%s error=%s",
            node.type,
            exc,
        )
        return OracleResult(error=f"{type(exc).__name__}: {exc}")
    if facts is None:
        return ORACLE_UNAVAILABLE
    return OracleResult(facts=facts)


# ---------------------------------------------------------------------------
# Declared-type oracle (TypeScript annotations)
# ---------------------------------------------------------------------------

_ARRAY_GENERICS = frozenset({"Array", "ReadonlyArray"})
_ARRAYLIKE_GENERICS = frozenset({
    "Set",
    "Map",
    "WeakSet",
    "WeakMap",
    "ReadonlySet",
    "ReadonlyMap",
})
_OBJECT_GENERICS = frozenset({"Record"})
_NULLISH_TYPES = frozenset({"null", "undefined", "void"})


class DeclaredTypeOracle:
    """Reads the TypeScript annotation on an identifier's declaration.

    ``const tags: string[] = load()`` makes a later ``if (tags)`` an array
    check at full confidence. Nullable unions (``string[] | undefined``)
    and optional parameters yield no facts, since there the truthiness
    test is a legitimate null guard.
    """

    def resolve_type(self, node: tree_sitter.Node) -> TypeFacts | None:
        if node.type != "identifier":
            return None
        binding = resolve_binding(node)
        if (
            binding is None
            or binding.destructured
            or binding.optional
            or binding.type_annotation is None
        ):
            return None
        inner = named_children(binding.type_annotation)
        if not inner:
            return None
        return facts_for_type(inner[0])


def facts_for_type(type_node: tree_sitter.Node) -> TypeFacts | None:
    """Map a TypeScript type node to collection facts, if it is one."""
    kind = type_node.type
    if kind in ("array_type", "tuple_type"):
        return TypeFacts(is_array=True)
    if kind in ("readonly_type", "parenthesized_type"):
        inner = named_children(type_node)
        return facts_for_type(inner[0]) if inner else None
    if kind == "object_type":
        return TypeFacts(is_object_not_array_not_callable=True)
    if kind == "predefined_type" and node_text(type_node) == "object":
        return TypeFacts(is_object_not_array_not_callable=True)
    if kind == "generic_type":
        name = node_text(field(type_node, "name"))
        if name in _ARRAY_GENERICS:
            return TypeFacts(is_array=True)
        if name in _ARRAYLIKE_GENERICS:
            return TypeFacts(is_array_like=True)
        if name in _OBJECT_GENERICS:
            return TypeFacts(is_object_not_array_not_callable=True)
        return None
    if kind == "union_type":
        return _union_facts(type_node)
    return None


def _union_facts(type_node: tree_sitter.Node) -> TypeFacts | None:
    members = _flatten_union(type_node)
    if any(node_text(m) in _NULLISH_TYPES for m in members):
        return None
    facts = [facts_for_type(m) for m in members]
    first = facts[0] if facts else None
    if first is None or any(f != first for f in facts):
        return None
    return first


def _flatten_union(type_node: tree_sitter.Node) -> list[tree_sitter.Node]:
    members: list[tree_sitter.Node] = []
    for child in named_children(type_node):
        if child.type == "union_type":
            members.extend(_flatten_union(child))
        else:
            members.append(child)
    return members
