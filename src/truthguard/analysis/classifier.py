"""Classify boolean-position expressions as collection-like.

Tiers are tried in trust order and the first match wins:

1. type oracle (optional)
2. literal shape: ``[]`` / ``{}``
3. ``Array``/``Object`` constructors and static factories
4. array-like constructors (``new Set()``), incl. the ``new Set([x])`` gotcha
5. array-returning instance methods (``xs.filter(f)``)
6. collection-suggestive property names (``user.roles``)
7. collection-suggestive identifiers, exact then (strict only) by suffix

Classification is a pure function of the node's shape, its local
syntactic context, the options and the vocabulary.
"""

from __future__ import annotations

import tree_sitter

from truthguard.analysis.nodes import (
    call_arguments,
    callee,
    field,
    is_identifier,
    named_children,
    node_text,
    property_name,
    unwrap_parens,
)
from truthguard.analysis.oracle import TypeOracle, query_oracle
from truthguard.analysis.schemas import RuleOptions
from truthguard.analysis.scope import inside_pattern, resolve_binding
from truthguard.analysis.value_objects import (
    UNCLASSIFIED,
    Classification,
    Vocabulary,
)
from truthguard.analysis.vocabulary import DEFAULT_VOCABULARY
from truthguard.constants import CollectionKind, Confidence, Evidence

_DEFAULT_OPTIONS = RuleOptions()


def classify(
    node: tree_sitter.Node,
    options: RuleOptions | None = None,
    oracle: TypeOracle | None = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> Classification:
    """Return the collection classification of an expression node."""
    opts = options or _DEFAULT_OPTIONS
    node = unwrap_parens(node)

    result = query_oracle(oracle, node)
    if result.facts is not None:
        kind = result.facts.to_kind()
        if kind != CollectionKind.NONE:
            return Classification(
                kind=kind,
                confidence=Confidence.ORACLE,
                evidence=Evidence.TYPE_ORACLE,
            )

    if node.type == "array":
        return Classification(
            kind=CollectionKind.ARRAY,
            confidence=Confidence.LITERAL,
            evidence=Evidence.LITERAL,
        )
    if node.type == "object":
        return Classification(
            kind=CollectionKind.OBJECT,
            confidence=Confidence.LITERAL,
            evidence=Evidence.LITERAL,
        )
    if node.type in ("call_expression", "new_expression"):
        return _classify_call(node, vocabulary)
    if node.type == "member_expression":
        return _classify_member(node, vocabulary)
    if node.type == "identifier":
        return _classify_identifier(node, opts, vocabulary)
    return UNCLASSIFIED


def _classify_call(
    node: tree_sitter.Node, vocabulary: Vocabulary
) -> Classification:
    fn = callee(node)
    if fn is None:
        return UNCLASSIFIED

    if fn.type == "identifier":
        name = node_text(fn)
        if name == "Array":
            return Classification(
                kind=CollectionKind.ARRAY,
                confidence=Confidence.CONSTRUCTOR,
                evidence=Evidence.CONSTRUCTOR,
            )
        if name == "Object":
            return Classification(
                kind=CollectionKind.OBJECT,
                confidence=Confidence.CONSTRUCTOR,
                evidence=Evidence.CONSTRUCTOR,
            )
        if name in vocabulary.arraylike_constructors:
            return _classify_arraylike_constructor(node, name)
        return UNCLASSIFIED

    if fn.type != "member_expression":
        return UNCLASSIFIED

    method = property_name(fn)
    receiver = field(fn, "object")
    if is_identifier(receiver, "Array") and method in vocabulary.array_factories:
        return Classification(
            kind=CollectionKind.ARRAY,
            confidence=Confidence.STATIC_METHOD,
            evidence=Evidence.STATIC_METHOD,
        )
    if (
        is_identifier(receiver, "Object")
        and method in vocabulary.object_factories
    ):
        return Classification(
            kind=CollectionKind.OBJECT,
            confidence=Confidence.STATIC_METHOD,
            evidence=Evidence.STATIC_METHOD,
        )
    if node.type == "call_expression" and method in vocabulary.array_methods:
        return Classification(
            kind=CollectionKind.ARRAY,
            confidence=Confidence.INSTANCE_METHOD,
            evidence=Evidence.INSTANCE_METHOD,
        )
    return UNCLASSIFIED


def _classify_arraylike_constructor(
    node: tree_sitter.Node, name: str
) -> Classification:
    """``new Set()`` is reportable; ``new Set(source)`` generally is not.

    Populating from data says nothing about emptiness, except for a
    one-element array literal, which always yields size 1.
    """
    args = call_arguments(node)
    if args is None:
        return UNCLASSIFIED
    if not args:
        return Classification(
            kind=CollectionKind.ARRAYLIKE,
            confidence=Confidence.ARRAYLIKE_CONSTRUCTOR,
            evidence=Evidence.CONSTRUCTOR,
        )
    if len(args) == 1:
        arg = unwrap_parens(args[0])
        elements = named_children(arg) if arg.type == "array" else []
        if len(elements) == 1 and elements[0].type != "spread_element":
            return Classification(
                kind=CollectionKind.ARRAYLIKE,
                confidence=Confidence.SUSPICIOUS_CONSTRUCTOR,
                evidence=Evidence.CONSTRUCTOR,
                suspicious_element=elements[0],
                constructor_name=name,
            )
    return UNCLASSIFIED


def _classify_member(
    node: tree_sitter.Node, vocabulary: Vocabulary
) -> Classification:
    name = property_name(node)
    if name is None:
        return UNCLASSIFIED
    # Deep paths (a.b.items) are too far from a known collection
    obj = field(node, "object")
    if obj is None or obj.type == "member_expression":
        return UNCLASSIFIED
    if name in vocabulary.array_properties:
        return Classification(
            kind=CollectionKind.ARRAY,
            confidence=Confidence.MEMBER_PROPERTY,
            evidence=Evidence.MEMBER_PROPERTY,
        )
    if name in vocabulary.object_properties:
        return Classification(
            kind=CollectionKind.OBJECT,
            confidence=Confidence.MEMBER_PROPERTY,
            evidence=Evidence.MEMBER_PROPERTY,
        )
    return UNCLASSIFIED


def _classify_identifier(
    node: tree_sitter.Node, options: RuleOptions, vocabulary: Vocabulary
) -> Classification:
    if is_destructured(node):
        return UNCLASSIFIED
    name = node_text(node)

    if name in vocabulary.array_names:
        return Classification(
            kind=CollectionKind.ARRAY,
            confidence=Confidence.EXACT_NAME,
            evidence=Evidence.VARIABLE_NAME,
        )
    if name in vocabulary.object_names:
        return Classification(
            kind=CollectionKind.OBJECT,
            confidence=Confidence.EXACT_NAME,
            evidence=Evidence.VARIABLE_NAME,
        )

    if not options.strict_naming:
        return UNCLASSIFIED
    if any(p.search(name) for p in vocabulary.array_name_patterns):
        return Classification(
            kind=CollectionKind.ARRAY,
            confidence=Confidence.NAME_PATTERN,
            evidence=Evidence.VARIABLE_PATTERN,
        )
    if any(p.search(name) for p in vocabulary.object_name_patterns):
        return Classification(
            kind=CollectionKind.OBJECT,
            confidence=Confidence.NAME_PATTERN,
            evidence=Evidence.VARIABLE_PATTERN,
        )
    return UNCLASSIFIED


def is_destructured(node: tree_sitter.Node) -> bool:
    """True for identifiers introduced by array/object/rest patterns.

    Destructured bindings are assumed validated where they were unpacked.
    """
    if inside_pattern(node):
        return True
    binding = resolve_binding(node)
    return binding is not None and binding.destructured
