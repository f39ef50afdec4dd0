"""Named rule option bundles (recommended, strict, typescript)."""

from __future__ import annotations

from truthguard.analysis.schemas import RuleOptions
from truthguard.constants import Preset
from truthguard.errors import InvalidOptionsError

PRESETS: dict[Preset, RuleOptions] = {
    Preset.RECOMMENDED: RuleOptions(),
    Preset.STRICT: RuleOptions(
        check_arrays=True,
        check_objects=True,
        check_array_like=True,
        strict_naming=True,
        allow_explicit_boolean=False,
    ),
    Preset.TYPESCRIPT: RuleOptions(),
}


def preset_options(name: str) -> RuleOptions:
    """Look up a preset by name (``recommended``, ``strict``, ``typescript``)."""
    try:
        return PRESETS[Preset(name)]
    except ValueError:
        valid = ", ".join(PRESETS)
        raise InvalidOptionsError(
            f"unknown preset '{name}'. Valid: {valid}"
        ) from None
