"""Collect lintable files, skipping generated code and ignored paths."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterable
from pathlib import Path

import pathspec

from truthguard.config import EXTENSION_MAP, Settings
from truthguard.constants import BINARY_DETECTION_BUFFER

logger = logging.getLogger(__name__)


def is_binary(path: Path) -> bool:
    """Return True if the file appears to be binary (null byte in first N bytes)."""
    try:
        with open(path, "rb") as f:
            chunk = f.read(BINARY_DETECTION_BUFFER)
        return b"\x00" in chunk
    except OSError:
        return True


def is_skipped_path(path: Path, settings: Settings | None = None) -> str | None:
    """Reason the path must never be linted, or None if it may be.

    Checks directory components against ``skip_directories`` (and hidden
    directories) and the file name against ``skip_file_globs``.
    """
    cfg = settings or Settings()
    skip_dirs = set(cfg.skip_directories)
    for part in path.parts[:-1]:
        if part in skip_dirs:
            return f"inside skipped directory '{part}'"
        if part.startswith(".") and part not in (".", ".."):
            return f"inside hidden directory '{part}'"
    for pattern in cfg.skip_file_globs:
        if fnmatch.fnmatch(path.name, pattern):
            return f"matches skip glob '{pattern}'"
    return None


def collect_files(
    paths: Iterable[Path], settings: Settings | None = None
) -> tuple[list[Path], list[tuple[Path, str]]]:
    """Expand files and directories into lintable source files.

    Returns ``(files, skipped)`` where ``skipped`` pairs each explicitly
    named file that was rejected with the reason. Files skipped while
    walking a directory are not reported.
    """
    cfg = settings or Settings()
    files: list[Path] = []
    skipped: list[tuple[Path, str]] = []
    seen: set[Path] = set()

    def _add(path: Path) -> None:
        key = path.resolve()
        if key not in seen:
            seen.add(key)
            files.append(path)

    for path in paths:
        if path.is_dir():
            for found in walk_source_files(path, cfg):
                _add(found)
            continue
        reason = _reject_reason(path, cfg, _relative_name(path))
        if reason is not None:
            skipped.append((path, reason))
            continue
        _add(path)

    logger.debug(
        "event=files_collected count=%d skipped=%d", len(files), len(skipped)
    )
    return files, skipped


def walk_source_files(root: Path, settings: Settings | None = None) -> list[Path]:
    """Walk ``root`` for JS/TS files, respecting skip rules and .gitignore.

    Symlinks that resolve outside the root are skipped.
    """
    cfg = settings or Settings()
    gitignore_patterns = _load_gitignore(root)
    found = _walk_inner(
        root, root, set(cfg.skip_directories), gitignore_patterns, root.resolve()
    )
    return [p for p in found if _reject_reason(p, cfg, p.relative_to(root)) is None]


def _relative_name(path: Path) -> Path:
    """Path an explicitly named file is judged by.

    Files under the working directory keep their relative components;
    anything else is judged by its file name alone.
    """
    try:
        return path.resolve().relative_to(Path.cwd().resolve())
    except ValueError:
        return Path(path.name)


def _reject_reason(path: Path, cfg: Settings, rel: Path) -> str | None:
    if not path.is_file():
        return "not a file"
    if EXTENSION_MAP.get(path.suffix.lower()) is None:
        return "unsupported file extension"
    reason = is_skipped_path(rel, cfg)
    if reason is not None:
        return reason
    try:
        size = path.stat().st_size
    except OSError:
        return "unreadable"
    if size > cfg.max_file_size_bytes:
        return f"larger than {cfg.max_file_size_bytes} bytes"
    if is_binary(path):
        return "binary content"
    return None


def _walk_inner(
    current: Path,
    root: Path,
    skip_dirs: set[str],
    gitignore_patterns: pathspec.PathSpec,
    resolved_root: Path,
) -> list[Path]:
    """Recursive walk helper with symlink protection."""
    files: list[Path] = []
    for item in sorted(current.iterdir()):
        if item.is_symlink():
            resolved = item.resolve()
            if not resolved.is_relative_to(resolved_root):
                continue
        rel = item.relative_to(root).as_posix()
        if item.is_dir():
            if item.name.startswith(".") or item.name in skip_dirs:
                continue
            if gitignore_patterns.match_file(rel + "/"):
                continue
            files.extend(
                _walk_inner(
                    item, root, skip_dirs, gitignore_patterns, resolved_root
                )
            )
        elif item.is_file():
            if item.suffix.lower() not in EXTENSION_MAP:
                continue
            if not gitignore_patterns.match_file(rel):
                files.append(item)
    return files


def _load_gitignore(root: Path) -> pathspec.PathSpec:
    """Load .gitignore patterns using pathspec."""
    gitignore = root / ".gitignore"
    if not gitignore.exists():
        return pathspec.PathSpec.from_lines("gitignore", [])
    try:
        with open(gitignore, encoding="utf-8") as f:
            return pathspec.PathSpec.from_lines("gitignore", f)
    except OSError:
        logger.warning("event=gitignore_unreadable path=%s", gitignore)
        return pathspec.PathSpec.from_lines("gitignore", [])
