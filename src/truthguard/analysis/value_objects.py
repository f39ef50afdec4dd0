"""Frozen, identity-less domain types for the classifier and advisor.

These values are produced per node and never persisted. Nodes are
tree-sitter nodes; everything else is plain data.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

import tree_sitter

from truthguard.constants import (
    CONFIDENCE_CEILINGS,
    MESSAGES,
    CollectionKind,
    Evidence,
    MessageId,
    SuppressionReason,
)


@dataclass(frozen=True)
class Classification:
    """Kind, confidence and evidence tier for one expression node.

    A tagged variant over :class:`Evidence`: construction rejects a
    confidence above the ceiling of its evidence tier, and a ``none``
    classification carries neither evidence nor confidence.
    """

    kind: CollectionKind
    confidence: int = 0
    evidence: Evidence | None = None
    # Set only for the single-element Set/Map constructor shape
    suspicious_element: tree_sitter.Node | None = field(
        default=None, compare=False
    )
    constructor_name: str | None = None

    def __post_init__(self) -> None:
        if self.kind == CollectionKind.NONE:
            if self.evidence is not None or self.confidence != 0:
                raise ValueError(
                    "none classification cannot carry evidence"
                )
            return
        if self.evidence is None:
            raise ValueError(f"{self.kind} classification needs evidence")
        ceiling = CONFIDENCE_CEILINGS[self.evidence]
        if not 0 < self.confidence <= ceiling:
            raise ValueError(
                f"confidence {self.confidence} outside 1..{ceiling} "
                f"for {self.evidence} evidence"
            )
        if (self.suspicious_element is None) != (
            self.constructor_name is None
        ):
            raise ValueError(
                "suspicious classification needs element and constructor"
            )

    @property
    def is_collection(self) -> bool:
        return self.kind != CollectionKind.NONE


UNCLASSIFIED = Classification(kind=CollectionKind.NONE)


@dataclass(frozen=True)
class TypeFacts:
    """What a type oracle knows about the static type of a node."""

    is_array: bool = False
    is_array_like: bool = False
    is_object_not_array_not_callable: bool = False

    def to_kind(self) -> CollectionKind:
        if self.is_array:
            return CollectionKind.ARRAY
        if self.is_array_like:
            return CollectionKind.ARRAYLIKE
        if self.is_object_not_array_not_callable:
            return CollectionKind.OBJECT
        return CollectionKind.NONE


@dataclass(frozen=True)
class OracleResult:
    """Outcome of one oracle query: resolved facts or unavailable."""

    facts: TypeFacts | None = None
    error: str | None = None


ORACLE_UNAVAILABLE = OracleResult()


@dataclass(frozen=True)
class Fix:
    """Replace the byte range ``[start_byte, end_byte)`` with text."""

    start_byte: int
    end_byte: int
    replacement: str


@dataclass(frozen=True)
class Alternative:
    """A labelled rewrite offered as an interactive suggestion."""

    description: str
    rewrite: str
    fix: Fix


@dataclass(frozen=True)
class Diagnosis:
    """A reportable finding on a single boolean-position node."""

    message_id: MessageId
    kind: CollectionKind
    confidence: int
    evidence: Evidence
    suggested_rewrite: str
    data: dict[str, str]
    alternatives: tuple[Alternative, ...]
    fix: Fix | None = None
    specialized: bool = False

    @property
    def message(self) -> str:
        return MESSAGES[self.message_id].format(**self.data)


@dataclass(frozen=True)
class Suppression:
    """The advisor declined to report a classified node."""

    reason: SuppressionReason


@dataclass(frozen=True)
class Vocabulary:
    """Collection-suggestive names the syntactic tiers match against.

    Injected into the classifier so callers can swap in a domain-specific
    vocabulary; see :mod:`truthguard.analysis.vocabulary` for defaults.
    """

    array_properties: frozenset[str]
    object_properties: frozenset[str]
    array_names: frozenset[str]
    object_names: frozenset[str]
    array_name_patterns: tuple[re.Pattern[str], ...]
    object_name_patterns: tuple[re.Pattern[str], ...]
    arraylike_constructors: frozenset[str]
    array_methods: frozenset[str]
    array_factories: frozenset[str]
    object_factories: frozenset[str]
