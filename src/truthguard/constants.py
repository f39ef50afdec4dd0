"""Shared constants: the single source of truth for cross-module values.

All magic strings and numbers that appear in 2+ files belong here.
StrEnum members are str-compatible, so downstream code (JSON reports,
message templates, CLI output) works unchanged.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class CollectionKind(StrEnum):
    """What a boolean-position expression was classified as."""

    ARRAY = "array"  # has .length
    OBJECT = "object"  # has enumerable keys
    ARRAYLIKE = "arraylike"  # has .size (Set, Map, ...)
    NONE = "none"


class Evidence(StrEnum):
    """Detection strategy that justified a classification.

    Declared in trust order, highest first.
    """

    TYPE_ORACLE = "type-oracle"
    LITERAL = "literal"
    CONSTRUCTOR = "constructor"
    STATIC_METHOD = "static-method"
    INSTANCE_METHOD = "instance-method"
    MEMBER_PROPERTY = "member-property"
    VARIABLE_NAME = "variable-name"
    VARIABLE_PATTERN = "variable-pattern"


class BooleanPosition(StrEnum):
    """Syntactic slot where a value is implicitly converted to boolean."""

    IF_TEST = "if-test"
    WHILE_TEST = "while-test"
    DO_WHILE_TEST = "do-while-test"
    FOR_TEST = "for-test"
    TERNARY_TEST = "ternary-test"
    LOGICAL_OPERAND = "logical-operand"
    NEGATION = "negation"


class MessageId(StrEnum):
    """Message template keys, in the camelCase form ESLint reports use."""

    ARRAY_TRUTHY = "arrayTruthy"
    OBJECT_TRUTHY = "objectTruthy"
    ARRAYLIKE_TRUTHY = "arrayLikeTruthy"
    ARRAY_IN_LOGICAL = "arrayInLogical"
    OBJECT_IN_LOGICAL = "objectInLogical"
    SUSPICIOUS_SINGLE_ELEMENT = "suspiciousSingleElement"


class SuppressionReason(StrEnum):
    """Why the advisor declined to report a classified node."""

    KIND_DISABLED = "kind-disabled"
    LOW_CONFIDENCE = "low-confidence"
    EXPLICIT_BOOLEAN = "explicit-boolean"
    GUARDED_BY_CONJUNCTION = "guarded-by-conjunction"
    LENGTH_ACCESS = "length-access"


class ReportFormat(StrEnum):
    """Supported lint report formats."""

    TEXT = "text"
    JSON = "json"


class Preset(StrEnum):
    """Named rule option bundles."""

    RECOMMENDED = "recommended"
    STRICT = "strict"
    TYPESCRIPT = "typescript"


# ── Confidence ───────────────────────────────────────────

# Highest confidence each evidence tier may claim.
CONFIDENCE_CEILINGS: dict[Evidence, int] = {
    Evidence.TYPE_ORACLE: 100,
    Evidence.LITERAL: 100,
    Evidence.CONSTRUCTOR: 95,
    Evidence.STATIC_METHOD: 95,
    Evidence.INSTANCE_METHOD: 85,
    Evidence.MEMBER_PROPERTY: 75,
    Evidence.VARIABLE_NAME: 85,
    Evidence.VARIABLE_PATTERN: 65,
}


class Confidence:
    """Named confidence scores assigned by the classifier tiers."""

    ORACLE = 100
    LITERAL = 100
    CONSTRUCTOR = 95
    STATIC_METHOD = 95
    SUSPICIOUS_CONSTRUCTOR = 90
    INSTANCE_METHOD = 85
    EXACT_NAME = 85
    ARRAYLIKE_CONSTRUCTOR = 80
    MEMBER_PROPERTY = 75
    NAME_PATTERN = 65


# Advisor gate: classifications below these are never reported.
DEFAULT_MIN_CONFIDENCE = 60
MIN_CONFIDENCE: dict[Evidence, int] = {
    Evidence.MEMBER_PROPERTY: 70,
    Evidence.VARIABLE_PATTERN: 65,
}

# ── Message Templates ────────────────────────────────────

MESSAGES: dict[MessageId, str] = {
    MessageId.ARRAY_TRUTHY: (
        "Arrays are always truthy in JavaScript, even when empty. "
        "Use '{suggestion}' to check for items."
    ),
    MessageId.OBJECT_TRUTHY: (
        "Objects are always truthy in JavaScript, even when empty. "
        "Use '{suggestion}' to check for properties."
    ),
    MessageId.ARRAYLIKE_TRUTHY: (
        "Array-like objects are always truthy. "
        "Use '{suggestion}' to check for items."
    ),
    MessageId.ARRAY_IN_LOGICAL: (
        "Arrays are always truthy in logical expressions. "
        "Use '{suggestion}' to check for items."
    ),
    MessageId.OBJECT_IN_LOGICAL: (
        "Objects are always truthy in logical expressions. "
        "Use '{suggestion}' to check for properties."
    ),
    MessageId.SUSPICIOUS_SINGLE_ELEMENT: (
        "new {constructor}([item]) always has size 1. "
        "Did you mean 'if ({element})' or "
        "'new {constructor}({element}).size > 0'?"
    ),
}

# ── Syntax ───────────────────────────────────────────────

LOGICAL_OPERATORS = frozenset({"&&", "||"})
COMPARISON_OPERATORS = frozenset(
    {">", ">=", "<", "<=", "===", "!==", "==", "!="}
)
SIZE_PROPERTIES = frozenset({"length", "size"})

# ── Misc ─────────────────────────────────────────────────

BINARY_DETECTION_BUFFER = 8192
