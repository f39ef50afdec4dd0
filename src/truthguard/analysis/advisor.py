"""Turn a classification into a diagnosis, or decide to stay quiet."""

from __future__ import annotations

import tree_sitter

from truthguard.analysis.nodes import (
    effective_parent,
    field,
    is_identifier,
    is_member_of,
    is_size_access,
    node_text,
    operator,
    property_name,
    unwrap_parens,
)
from truthguard.analysis.schemas import RuleOptions
from truthguard.analysis.value_objects import (
    Alternative,
    Classification,
    Diagnosis,
    Fix,
    Suppression,
)
from truthguard.constants import (
    COMPARISON_OPERATORS,
    DEFAULT_MIN_CONFIDENCE,
    LOGICAL_OPERATORS,
    MIN_CONFIDENCE,
    SIZE_PROPERTIES,
    BooleanPosition,
    CollectionKind,
    Evidence,
    MessageId,
    SuppressionReason,
)

_DEFAULT_OPTIONS = RuleOptions()

_TRUTHY_MESSAGES: dict[CollectionKind, MessageId] = {
    CollectionKind.ARRAY: MessageId.ARRAY_TRUTHY,
    CollectionKind.OBJECT: MessageId.OBJECT_TRUTHY,
    CollectionKind.ARRAYLIKE: MessageId.ARRAYLIKE_TRUTHY,
}

_LOGICAL_MESSAGES: dict[CollectionKind, MessageId] = {
    CollectionKind.ARRAY: MessageId.ARRAY_IN_LOGICAL,
    CollectionKind.OBJECT: MessageId.OBJECT_IN_LOGICAL,
    # Array-likes have no logical-specific wording
    CollectionKind.ARRAYLIKE: MessageId.ARRAYLIKE_TRUTHY,
}


def advise(
    node: tree_sitter.Node,
    classification: Classification,
    position: BooleanPosition | None = None,
    options: RuleOptions | None = None,
) -> Diagnosis | Suppression | None:
    """Decide what to report for a classified boolean-position node.

    Returns ``None`` for unclassified nodes, a :class:`Suppression` when a
    rule says the check is already safe or out of scope, and otherwise a
    :class:`Diagnosis` with the rewrite and its alternatives.
    """
    evidence = classification.evidence
    if not classification.is_collection or evidence is None:
        return None
    opts = options or _DEFAULT_OPTIONS
    node = unwrap_parens(node)

    reason = suppression_reason(node, classification, opts)
    if reason is not None:
        return Suppression(reason=reason)

    element = classification.suspicious_element
    ctor = classification.constructor_name
    if element is not None and ctor is not None:
        return _suspicious_diagnosis(
            node, classification, evidence, element, ctor
        )
    if position is None:
        position = infer_position(node)
    return _generic_diagnosis(node, classification, evidence, position)


def suppression_reason(
    node: tree_sitter.Node,
    classification: Classification,
    options: RuleOptions,
) -> SuppressionReason | None:
    """First suppression rule that applies to the node, if any."""
    if not options.should_check(classification.kind):
        return SuppressionReason.KIND_DISABLED
    if classification.confidence < min_confidence(classification.evidence):
        return SuppressionReason.LOW_CONFIDENCE
    if options.allow_explicit_boolean and is_explicit_boolean(node):
        return SuppressionReason.EXPLICIT_BOOLEAN
    if is_guarded_by_conjunction(node):
        return SuppressionReason.GUARDED_BY_CONJUNCTION
    if is_length_access_object(node):
        return SuppressionReason.LENGTH_ACCESS
    return None


def min_confidence(evidence: Evidence | None) -> int:
    if evidence is None:
        return DEFAULT_MIN_CONFIDENCE
    return MIN_CONFIDENCE.get(evidence, DEFAULT_MIN_CONFIDENCE)


# ---------------------------------------------------------------------------
# Context checks
# ---------------------------------------------------------------------------


def is_explicit_boolean(node: tree_sitter.Node) -> bool:
    """``Boolean(node)`` or ``!!node``."""
    parent = effective_parent(node)
    if parent is None:
        return False
    if parent.type == "arguments":
        call = parent.parent
        return (
            call is not None
            and call.type == "call_expression"
            and is_identifier(field(call, "function"), "Boolean")
        )
    if parent.type == "unary_expression" and operator(parent) == "!":
        grandparent = effective_parent(parent)
        return (
            grandparent is not None
            and grandparent.type == "unary_expression"
            and operator(grandparent) == "!"
        )
    return False


def is_guarded_by_conjunction(node: tree_sitter.Node) -> bool:
    """``node && <size check>`` where the right side already tests size.

    Accepted right operands: a comparison whose left side is a
    ``.length``/``.size`` access (``x.length > 0``,
    ``Object.keys(x).length >= 1``), a bare ``.length``/``.size`` access,
    or ``Object.keys(...).length``. Any comparison operator counts, not
    just ``>``/``>=``: ``xs.length === 3`` already tests the size, so the
    left operand is not being used for its truthiness.
    """
    parent = effective_parent(node)
    if (
        parent is None
        or parent.type != "binary_expression"
        or operator(parent) != "&&"
        or field(parent, "left") != node
    ):
        return False
    right = field(parent, "right")
    if right is None:
        return False
    if right.type == "binary_expression":
        return operator(right) in COMPARISON_OPERATORS and is_size_access(
            field(right, "left")
        )
    return is_size_access(right) or _is_object_keys_length(right)


def _is_object_keys_length(node: tree_sitter.Node) -> bool:
    if property_name(node) != "length":
        return False
    obj = field(node, "object")
    if obj is None or obj.type != "call_expression":
        return False
    fn = field(obj, "function")
    return fn is not None and is_member_of(fn, "Object", frozenset({"keys"}))


def is_length_access_object(node: tree_sitter.Node) -> bool:
    """``node.length``/``node.size``, optional (``node?.size``) or direct."""
    parent = effective_parent(node)
    if parent is None or parent.type != "member_expression":
        return False
    if field(parent, "object") != node:
        return False
    return property_name(parent) in SIZE_PROPERTIES


def infer_position(node: tree_sitter.Node) -> BooleanPosition:
    """Best-effort position for callers that did not supply one."""
    parent = effective_parent(node)
    if parent is None:
        return BooleanPosition.IF_TEST
    if (
        parent.type == "binary_expression"
        and operator(parent) in LOGICAL_OPERATORS
    ):
        return BooleanPosition.LOGICAL_OPERAND
    return {
        "unary_expression": BooleanPosition.NEGATION,
        "ternary_expression": BooleanPosition.TERNARY_TEST,
        "while_statement": BooleanPosition.WHILE_TEST,
        "do_statement": BooleanPosition.DO_WHILE_TEST,
        "for_statement": BooleanPosition.FOR_TEST,
    }.get(parent.type, BooleanPosition.IF_TEST)


# ---------------------------------------------------------------------------
# Rewrites
# ---------------------------------------------------------------------------

# Expression types that bind looser than a prefix `!`
_LOOSE_EXPRESSIONS = frozenset({
    "binary_expression",
    "ternary_expression",
    "assignment_expression",
    "augmented_assignment_expression",
    "sequence_expression",
    "arrow_function",
    "yield_expression",
})


def generate_rewrite(text: str, kind: CollectionKind) -> str:
    """Explicit emptiness check for ``text`` (returned as-is if blank)."""
    if not text or not text.strip():
        return text
    if kind == CollectionKind.OBJECT:
        return f"Object.keys({text}).length > 0"
    if kind == CollectionKind.ARRAYLIKE:
        return f"{text}.size > 0"
    return f"{text}.length > 0"


def receiver_text(node: tree_sitter.Node) -> str:
    """Source of ``node`` as the object of a trailing member access.

    ``new Set`` without an argument list would otherwise swallow the
    access: ``new Set.size`` parses as ``new (Set.size)``.
    """
    text = node_text(node)
    if node.type == "new_expression" and field(node, "arguments") is None:
        return f"({text})"
    return text


def message_id_for(
    kind: CollectionKind, position: BooleanPosition
) -> MessageId:
    if position == BooleanPosition.LOGICAL_OPERAND:
        return _LOGICAL_MESSAGES[kind]
    return _TRUTHY_MESSAGES[kind]


def _replacement_fix(
    node: tree_sitter.Node, text: str, *, loose: bool
) -> Fix:
    """Replace ``node`` with ``text``, grouping it under a bare ``!``."""
    if loose and text.strip() and _is_negated(node):
        text = f"({text})"
    return Fix(
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        replacement=text,
    )


def _is_negated(node: tree_sitter.Node) -> bool:
    parent = node.parent
    return (
        parent is not None
        and parent.type == "unary_expression"
        and operator(parent) == "!"
    )


def _generic_diagnosis(
    node: tree_sitter.Node,
    classification: Classification,
    evidence: Evidence,
    position: BooleanPosition,
) -> Diagnosis:
    text = node_text(node)
    kind = classification.kind
    target = text if kind == CollectionKind.OBJECT else receiver_text(node)
    suggestion = generate_rewrite(target, kind)
    fix = _replacement_fix(node, suggestion, loose=suggestion != text)

    alternatives = [
        Alternative(
            description=(
                f"Safe default: Use {suggestion} to check for "
                "items/properties"
            ),
            rewrite=suggestion,
            fix=fix,
        )
    ]
    if kind != CollectionKind.ARRAYLIKE:
        coerced = f"Boolean({text})"
        alternatives.append(
            Alternative(
                description=(
                    f"Explicit coercion: Use {coerced} if you really "
                    "want a boolean"
                ),
                rewrite=coerced,
                fix=_replacement_fix(node, coerced, loose=False),
            )
        )

    return Diagnosis(
        message_id=message_id_for(kind, position),
        kind=kind,
        confidence=classification.confidence,
        evidence=evidence,
        suggested_rewrite=suggestion,
        data={"suggestion": suggestion},
        alternatives=tuple(alternatives),
        fix=fix,
    )


def _suspicious_diagnosis(
    node: tree_sitter.Node,
    classification: Classification,
    evidence: Evidence,
    element: tree_sitter.Node,
    ctor: str,
) -> Diagnosis:
    """``new Set([x])`` is always size 1; intent is most likely ``x``.

    No primary fix: each alternative changes behavior differently, so
    the choice is left to the author.
    """
    element_text = node_text(element)
    from_element = f"new {ctor}({element_text}).size > 0"
    size_check = generate_rewrite(receiver_text(node), classification.kind)

    alternatives = (
        Alternative(
            description=f"Check the element directly: if ({element_text})",
            rewrite=element_text,
            fix=_replacement_fix(
                node,
                element_text,
                loose=unwrap_parens(element).type in _LOOSE_EXPRESSIONS,
            ),
        ),
        Alternative(
            description=f"Create {ctor} from element: {from_element}",
            rewrite=from_element,
            fix=_replacement_fix(node, from_element, loose=True),
        ),
        Alternative(
            description=f"Check size (current behavior): {size_check}",
            rewrite=size_check,
            fix=_replacement_fix(node, size_check, loose=True),
        ),
    )
    return Diagnosis(
        message_id=MessageId.SUSPICIOUS_SINGLE_ELEMENT,
        kind=classification.kind,
        confidence=classification.confidence,
        evidence=evidence,
        suggested_rewrite=element_text,
        data={"element": element_text, "constructor": ctor},
        alternatives=alternatives,
        fix=None,
        specialized=True,
    )
