"""Lexical binding lookup within a single syntax tree.

Resolves an identifier to its nearest enclosing declaration (variable
declarator, function parameter, catch/loop binding) by walking up the
parent chain. No cross-file or cross-call reasoning: this only answers
"how was this name introduced in the code around it".
"""

from __future__ import annotations

from dataclasses import dataclass

import tree_sitter

from truthguard.analysis.nodes import named_children, node_text

PATTERN_TYPES = frozenset({"array_pattern", "object_pattern", "rest_pattern"})

_FUNCTION_TYPES = frozenset({
    "function_declaration",
    "function_expression",
    "function",
    "generator_function_declaration",
    "generator_function",
    "arrow_function",
    "method_definition",
})

_BLOCK_TYPES = frozenset({
    "program",
    "statement_block",
    "switch_case",
    "switch_default",
    "class_static_block",
})

_DECLARATION_TYPES = frozenset({"lexical_declaration", "variable_declaration"})


@dataclass(frozen=True)
class Binding:
    """How a name was introduced."""

    name: str
    declaration: tree_sitter.Node
    destructured: bool = False
    optional: bool = False
    # TypeScript ``type_annotation`` node, when one was written
    type_annotation: tree_sitter.Node | None = None


def inside_pattern(node: tree_sitter.Node) -> bool:
    """True when the node sits anywhere inside a destructuring pattern."""
    current = node.parent
    while current is not None:
        if current.type in PATTERN_TYPES:
            return True
        current = current.parent
    return False


def pattern_names(node: tree_sitter.Node) -> set[str]:
    """Names bound by a (possibly nested) destructuring pattern."""
    names: set[str] = set()
    _collect_pattern_names(node, names)
    return names


def _collect_pattern_names(node: tree_sitter.Node, names: set[str]) -> None:
    if node.type in ("identifier", "shorthand_property_identifier_pattern"):
        names.add(node_text(node))
        return
    if node.type == "pair_pattern":
        value = node.child_by_field_name("value")
        if value is not None:
            _collect_pattern_names(value, names)
        return
    if node.type in ("assignment_pattern", "object_assignment_pattern"):
        left = node.child_by_field_name("left")
        if left is not None:
            _collect_pattern_names(left, names)
        return
    if node.type in PATTERN_TYPES:
        for child in named_children(node):
            _collect_pattern_names(child, names)


def resolve_binding(identifier: tree_sitter.Node) -> Binding | None:
    """Find the nearest declaration of ``identifier`` in enclosing scopes."""
    if identifier.type != "identifier":
        return None
    name = node_text(identifier)
    if not name:
        return None

    current = identifier.parent
    while current is not None:
        binding = _binding_in(current, name)
        if binding is not None:
            return binding
        current = current.parent
    return None


def _binding_in(scope: tree_sitter.Node, name: str) -> Binding | None:
    if scope.type in _FUNCTION_TYPES:
        return _parameter_binding(scope, name)
    if scope.type == "catch_clause":
        param = scope.child_by_field_name("parameter")
        if param is not None:
            return _match_target(param, name, scope)
        return None
    if scope.type == "for_in_statement":
        left = scope.child_by_field_name("left")
        if left is not None:
            return _match_target(left, name, scope)
        return None
    if scope.type == "for_statement":
        init = scope.child_by_field_name("initializer")
        if init is not None and init.type in _DECLARATION_TYPES:
            return _declaration_binding(init, name)
        return None
    if scope.type in _BLOCK_TYPES:
        for stmt in named_children(scope):
            binding = _statement_binding(stmt, name)
            if binding is not None:
                return binding
    return None


def _statement_binding(stmt: tree_sitter.Node, name: str) -> Binding | None:
    if stmt.type == "export_statement":
        decl = stmt.child_by_field_name("declaration")
        return _statement_binding(decl, name) if decl is not None else None
    if stmt.type in _DECLARATION_TYPES:
        return _declaration_binding(stmt, name)
    if stmt.type in (
        "function_declaration",
        "generator_function_declaration",
        "class_declaration",
    ):
        decl_name = stmt.child_by_field_name("name")
        if decl_name is not None and node_text(decl_name) == name:
            return Binding(name=name, declaration=stmt)
    return None


def _declaration_binding(decl: tree_sitter.Node, name: str) -> Binding | None:
    for declarator in named_children(decl):
        if declarator.type != "variable_declarator":
            continue
        target = declarator.child_by_field_name("name")
        if target is None:
            continue
        if target.type == "identifier":
            if node_text(target) == name:
                return Binding(
                    name=name,
                    declaration=declarator,
                    type_annotation=declarator.child_by_field_name("type"),
                )
        elif name in pattern_names(target):
            return Binding(name=name, declaration=declarator, destructured=True)
    return None


def _parameter_binding(func: tree_sitter.Node, name: str) -> Binding | None:
    single = func.child_by_field_name("parameter")
    if single is not None:
        return _match_target(single, name, func)
    params = func.child_by_field_name("parameters")
    if params is None:
        return None
    for param in named_children(params):
        if param.type in ("required_parameter", "optional_parameter"):
            # TypeScript wraps each parameter with its annotation
            target = param.child_by_field_name("pattern")
            if target is None:
                continue
            binding = _match_target(target, name, param)
            if binding is not None and not binding.destructured:
                return Binding(
                    name=name,
                    declaration=param,
                    optional=param.type == "optional_parameter",
                    type_annotation=param.child_by_field_name("type"),
                )
            if binding is not None:
                return binding
            continue
        binding = _match_target(param, name, func)
        if binding is not None:
            return binding
    return None


def _match_target(
    target: tree_sitter.Node, name: str, declaration: tree_sitter.Node
) -> Binding | None:
    if target.type == "identifier":
        if node_text(target) == name:
            return Binding(name=name, declaration=declaration)
        return None
    if target.type == "assignment_pattern":
        left = target.child_by_field_name("left")
        if left is None:
            return None
        return _match_target(left, name, declaration)
    if name in pattern_names(target):
        return Binding(name=name, declaration=declaration, destructured=True)
    return None
