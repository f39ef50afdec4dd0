"""Small read-only helpers over tree-sitter JavaScript/TypeScript nodes.

The grammars keep parentheses and comments as real nodes; ESTree-style
reasoning wants neither, so every accessor here looks through
``parenthesized_expression`` wrappers and skips ``comment`` children.
"""

from __future__ import annotations

import tree_sitter

PAREN = "parenthesized_expression"
CALL_TYPES = frozenset({"call_expression", "new_expression"})


def node_text(node: tree_sitter.Node | None) -> str:
    """Source text of a node, or ``""`` for synthesized/empty nodes."""
    if node is None or not node.text:
        return ""
    return node.text.decode("utf-8")


def named_children(node: tree_sitter.Node) -> list[tree_sitter.Node]:
    """Named children without comments."""
    return [c for c in node.named_children if c.type != "comment"]


def unwrap_parens(node: tree_sitter.Node) -> tree_sitter.Node:
    """Descend through parenthesized wrappers to the inner expression."""
    while node.type == PAREN:
        inner = named_children(node)
        if not inner:
            break
        node = inner[0]
    return node


def field(node: tree_sitter.Node, name: str) -> tree_sitter.Node | None:
    """Field child with parentheses unwrapped, skipping comments."""
    for child in node.children_by_field_name(name):
        if child.type != "comment":
            return unwrap_parens(child)
    return None


def effective_parent(node: tree_sitter.Node) -> tree_sitter.Node | None:
    """First ancestor that is not a parenthesized wrapper."""
    parent = node.parent
    while parent is not None and parent.type == PAREN:
        parent = parent.parent
    return parent


def operator(node: tree_sitter.Node) -> str | None:
    """Operator token of a unary or binary expression."""
    op = node.child_by_field_name("operator")
    return op.type if op is not None else None


def is_identifier(node: tree_sitter.Node | None, name: str | None = None) -> bool:
    if node is None or node.type != "identifier":
        return False
    return name is None or node_text(node) == name


def property_name(node: tree_sitter.Node) -> str | None:
    """Name of a non-computed member access (``a.b`` → ``"b"``)."""
    if node.type != "member_expression":
        return None
    prop = node.child_by_field_name("property")
    if prop is None or prop.type != "property_identifier":
        return None
    return node_text(prop)


def callee(node: tree_sitter.Node) -> tree_sitter.Node | None:
    """Function being called (``f`` in ``f()`` and ``new f()``)."""
    if node.type == "call_expression":
        return field(node, "function")
    if node.type == "new_expression":
        return field(node, "constructor")
    return None


def call_arguments(node: tree_sitter.Node) -> list[tree_sitter.Node] | None:
    """Argument nodes of a call, ``[]`` for ``new X``.

    Returns ``None`` for tagged templates, which are not argument lists.
    """
    args = node.child_by_field_name("arguments")
    if args is None:
        return []
    if args.type != "arguments":
        return None
    return named_children(args)


def is_member_of(
    node: tree_sitter.Node, obj_name: str, properties: frozenset[str]
) -> bool:
    """True for ``obj_name.<prop>`` with ``prop`` in ``properties``."""
    if node.type != "member_expression":
        return False
    obj = field(node, "object")
    return is_identifier(obj, obj_name) and property_name(node) in properties


def is_size_access(node: tree_sitter.Node | None) -> bool:
    """True for a bare ``x.length`` or ``x.size`` (including ``x?.size``)."""
    if node is None:
        return False
    return property_name(node) in ("length", "size")
