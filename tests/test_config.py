"""Tests for Settings parsing and validators."""

from __future__ import annotations

import logging

import pytest

from truthguard.config import EXTENSION_MAP, GRAMMAR_MODULES, Settings
from truthguard.constants import Preset


class TestSkipListParsing:
    def test_defaults(self) -> None:
        s = Settings()
        assert "node_modules" in s.skip_directories
        assert "*.min.js" in s.skip_file_globs
        assert s.preset == Preset.RECOMMENDED
        assert s.use_type_annotations is True

    def test_comma_separated_string_parsed_to_list(self) -> None:
        s = Settings(skip_directories="gen , out")  # type: ignore[arg-type]
        assert s.skip_directories == ["gen", "out"]

    def test_json_list_passthrough(self) -> None:
        s = Settings(skip_file_globs=["*.gen.js"])
        assert s.skip_file_globs == ["*.gen.js"]

    def test_environment_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRUTHGUARD_SKIP_DIRECTORIES", "generated,tmp")
        monkeypatch.setenv("TRUTHGUARD_PRESET", "strict")
        monkeypatch.setenv("TRUTHGUARD_USE_TYPE_ANNOTATIONS", "false")
        s = Settings()
        assert s.skip_directories == ["generated", "tmp"]
        assert s.preset == Preset.STRICT
        assert s.use_type_annotations is False

    def test_duplicate_directories_warn(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="truthguard.config"):
            s = Settings(skip_directories=["dist", "dist", "out"])
        assert "Duplicate entries in TRUTHGUARD_SKIP_DIRECTORIES" in caplog.text
        assert s.skip_directories == ["dist", "dist", "out"]


class TestValidation:
    def test_non_positive_size_raises(self) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            Settings(max_file_size_bytes=0)

    def test_unknown_preset_raises(self) -> None:
        with pytest.raises(ValueError):
            Settings(preset="loose")  # type: ignore[arg-type]


def test_every_language_has_a_grammar() -> None:
    assert set(EXTENSION_MAP.values()) == set(GRAMMAR_MODULES)
