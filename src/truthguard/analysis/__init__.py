"""Collection truthiness analysis: classifier and advisor over tree-sitter."""

from truthguard.analysis.advisor import advise, generate_rewrite
from truthguard.analysis.classifier import classify
from truthguard.analysis.oracle import (
    DeclaredTypeOracle,
    TypeOracle,
    query_oracle,
)
from truthguard.analysis.presets import PRESETS, preset_options
from truthguard.analysis.schemas import (
    FileReport,
    Finding,
    LintReport,
    RuleOptions,
)
from truthguard.analysis.value_objects import (
    Alternative,
    Classification,
    Diagnosis,
    Fix,
    OracleResult,
    Suppression,
    TypeFacts,
    Vocabulary,
)
from truthguard.analysis.visitor import find_boolean_positions
from truthguard.analysis.vocabulary import DEFAULT_VOCABULARY, extend_vocabulary

__all__ = [
    "DEFAULT_VOCABULARY",
    "PRESETS",
    "Alternative",
    "Classification",
    "DeclaredTypeOracle",
    "Diagnosis",
    "FileReport",
    "Finding",
    "Fix",
    "LintReport",
    "OracleResult",
    "RuleOptions",
    "Suppression",
    "TypeFacts",
    "TypeOracle",
    "Vocabulary",
    "advise",
    "classify",
    "extend_vocabulary",
    "find_boolean_positions",
    "generate_rewrite",
    "preset_options",
    "query_oracle",
]
