"""Find expressions that sit in boolean-evaluation position."""

from __future__ import annotations

from collections.abc import Iterator

import tree_sitter

from truthguard.analysis.nodes import (
    field,
    named_children,
    operator,
    unwrap_parens,
)
from truthguard.constants import LOGICAL_OPERATORS, BooleanPosition

_TEST_FIELDS: dict[str, BooleanPosition] = {
    "if_statement": BooleanPosition.IF_TEST,
    "while_statement": BooleanPosition.WHILE_TEST,
    "do_statement": BooleanPosition.DO_WHILE_TEST,
    "ternary_expression": BooleanPosition.TERNARY_TEST,
}


def find_boolean_positions(
    root: tree_sitter.Node,
) -> Iterator[tuple[tree_sitter.Node, BooleanPosition]]:
    """Yield ``(node, position)`` pairs in source order.

    Nodes are returned with parentheses unwrapped. Positions:
    if/while/do-while/for tests, ternary tests, both operands of
    ``&&``/``||``, and the operand of ``!``.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield from _positions_at(node)
        stack.extend(reversed(node.children))


def _positions_at(
    node: tree_sitter.Node,
) -> Iterator[tuple[tree_sitter.Node, BooleanPosition]]:
    position = _TEST_FIELDS.get(node.type)
    if position is not None:
        test = field(node, "condition")
        if test is not None:
            yield test, position
        return

    if node.type == "for_statement":
        test = _for_condition(node)
        if test is not None:
            yield test, BooleanPosition.FOR_TEST
        return

    if node.type == "binary_expression":
        if operator(node) in LOGICAL_OPERATORS:
            for name in ("left", "right"):
                operand = field(node, name)
                if operand is not None:
                    yield operand, BooleanPosition.LOGICAL_OPERAND
        return

    if node.type == "unary_expression" and operator(node) == "!":
        argument = field(node, "argument")
        if argument is not None:
            yield argument, BooleanPosition.NEGATION


def _for_condition(node: tree_sitter.Node) -> tree_sitter.Node | None:
    """The test of ``for (init; test; update)``, if one was written.

    Depending on grammar version the condition is either the expression
    itself or an ``expression_statement`` wrapping it.
    """
    for child in node.children_by_field_name("condition"):
        if not child.is_named or child.type in ("empty_statement", "comment"):
            continue
        if child.type == "expression_statement":
            inner = named_children(child)
            return unwrap_parens(inner[0]) if inner else None
        return unwrap_parens(child)
    return None
