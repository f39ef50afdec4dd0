"""Source ingestion: find lintable files and parse them."""

from truthguard.ingestion.file_walker import (
    collect_files,
    is_binary,
    is_skipped_path,
    walk_source_files,
)
from truthguard.ingestion.parser import (
    get_parser,
    language_for_path,
    parse_source,
)

__all__ = [
    "collect_files",
    "get_parser",
    "is_binary",
    "is_skipped_path",
    "language_for_path",
    "parse_source",
    "walk_source_files",
]
