"""Tests for lintable-file discovery and the skip safety net."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.conftest import SAMPLE_REPO
from truthguard.config import Settings
from truthguard.ingestion.file_walker import (
    collect_files,
    is_binary,
    is_skipped_path,
    walk_source_files,
)


def _names(paths: list[Path], root: Path) -> list[str]:
    return [p.relative_to(root).as_posix() for p in paths]


class TestIsSkippedPath:
    @pytest.mark.parametrize(
        "path",
        [
            "node_modules/react/index.js",
            "packages/app/dist/main.js",
            "build/out.js",
            "coverage/lcov-report/prettify.js",
            ".next/server/page.js",
            "vendor/jquery.js",
        ],
    )
    def test_generated_directories(self, path: str) -> None:
        assert is_skipped_path(Path(path)) is not None

    @pytest.mark.parametrize(
        "name", ["app.min.js", "lib.min.mjs", "main.bundle.js", "12.chunk.js"]
    )
    def test_generated_file_names(self, name: str) -> None:
        reason = is_skipped_path(Path("src") / name)
        assert reason is not None
        assert "skip glob" in reason

    def test_hidden_directory(self) -> None:
        reason = is_skipped_path(Path(".cache/tmp.js"))
        assert reason == "inside hidden directory '.cache'"

    @pytest.mark.parametrize(
        "path", ["src/app.js", "./src/app.ts", "lib/minify.js", "distance.js"]
    )
    def test_source_files_pass(self, path: str) -> None:
        assert is_skipped_path(Path(path)) is None

    def test_configurable(self) -> None:
        settings = Settings(
            skip_directories="generated",  # type: ignore[arg-type]
            skip_file_globs="*.gen.ts",  # type: ignore[arg-type]
        )
        assert is_skipped_path(Path("generated/a.ts"), settings) is not None
        assert is_skipped_path(Path("src/a.gen.ts"), settings) is not None
        assert is_skipped_path(Path("dist/a.ts"), settings) is None


class TestWalkSourceFiles:
    def test_sample_repo(self) -> None:
        files = walk_source_files(SAMPLE_REPO)
        assert _names(files, SAMPLE_REPO) == [
            "src/cart.js",
            "src/clean.mjs",
            "src/components/filters.ts",
        ]

    def test_oversized_files_are_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "big.js").write_text("const a = 1;\n" * 100)
        (tmp_path / "small.js").write_text("const a = 1;\n")
        settings = Settings(max_file_size_bytes=200)
        assert _names(walk_source_files(tmp_path, settings), tmp_path) == [
            "small.js"
        ]

    def test_binary_files_are_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "blob.js").write_bytes(b"\x00\x01\x02")
        assert walk_source_files(tmp_path) == []

    def test_symlink_outside_root_is_skipped(self, tmp_path: Path) -> None:
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "secret.js").write_text("if ([]) {}\n")
        root = tmp_path / "repo"
        root.mkdir()
        (root / "link").symlink_to(outside, target_is_directory=True)
        assert walk_source_files(root) == []


class TestCollectFiles:
    def test_explicit_skipped_file_is_reported(self) -> None:
        minified = SAMPLE_REPO / "src" / "app.min.js"
        files, skipped = collect_files([minified])
        assert files == []
        assert len(skipped) == 1
        assert skipped[0][0] == minified
        assert "skip glob" in skipped[0][1]

    def test_explicit_unsupported_file_is_reported(self) -> None:
        files, skipped = collect_files([SAMPLE_REPO / "src" / "README.md"])
        assert files == []
        assert skipped[0][1] == "unsupported file extension"

    def test_duplicates_are_collapsed(self) -> None:
        cart = SAMPLE_REPO / "src" / "cart.js"
        files, _ = collect_files([cart, SAMPLE_REPO, cart])
        assert _names(files, SAMPLE_REPO) == [
            "src/cart.js",
            "src/clean.mjs",
            "src/components/filters.ts",
        ]


class TestIsBinary:
    def test_text(self, tmp_path: Path) -> None:
        path = tmp_path / "a.js"
        path.write_text("let a = 1;\n")
        assert not is_binary(path)

    def test_missing_file_counts_as_binary(self, tmp_path: Path) -> None:
        assert is_binary(tmp_path / "missing.js")
