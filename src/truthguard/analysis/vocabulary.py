"""Default collection vocabulary.

Membership is product policy, not an invariant: these lists are a
starting point tuned on common application code. Build a custom
:class:`Vocabulary` (or use :func:`extend_vocabulary`) for other
codebases.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import replace

from truthguard.analysis.value_objects import Vocabulary

ARRAY_PROPERTIES = frozenset({
    "roles",
    "tags",
    "items",
    "results",
    "activities",
    "connections",
    "posts",
    "comments",
    "notifications",
    "errors",
    "warnings",
    "failures",
    "duplicates",
})

OBJECT_PROPERTIES = frozenset({
    "options",
    "config",
    "settings",
    "preferences",
    "filters",
    "metadata",
    "dateRange",
    "timeRange",
})

ARRAY_NAMES = frozenset({
    "activities",
    "connections",
    "results",
    "items",
    "elements",
    "entries",
    "records",
    "users",
    "products",
    "files",
    "images",
    "categories",
    "widgets",
    "posts",
    "comments",
    "notifications",
    "tags",
    "roles",
    "errors",
    "warnings",
    "failures",
    "duplicates",
    "inactiveUsers",
    "userIds",
    "validatedWidgets",
    "recentPosts",
    "connectionTypes",
    "migrationFiles",
    "pending",
    "appliedMigrations",
    "allMigrations",
    "migrations",
    "batch",
    "collections",
    "statements",
})

OBJECT_NAMES = frozenset({
    "options",
    "config",
    "settings",
    "props",
    "attributes",
    "metadata",
    "preferences",
    "privacy",
    "dashboard",
    "filters",
    "updates",
    "userData",
    "userContent",
    "analytics",
    "timeRange",
    "dateRange",
    "activityGroups",
    "connectionsByType",
    "updatedPreferences",
})

# Suffix patterns, consulted only under strict naming
ARRAY_NAME_PATTERNS = tuple(
    re.compile(p)
    for p in (
        r"[Ll]ist$",
        r"[Aa]rray$",
        r"[Ii]tems$",
        r"[Ee]ntries$",
        r"[Rr]ecords$",
        r"[Rr]esults$",
        r"[Cc]ollection$",
    )
)

OBJECT_NAME_PATTERNS = tuple(
    re.compile(p)
    for p in (
        r"[Oo]ptions$",
        r"[Cc]onfig$",
        r"[Ss]ettings$",
        r"[Oo]bject$",
        r"[Dd]ata$",
        r"[Ii]nfo$",
        r"[Mm]ap$",
    )
)

ARRAYLIKE_CONSTRUCTORS = frozenset({"Set", "Map", "WeakSet", "WeakMap"})

# Instance methods that always return a (new or same) array
ARRAY_METHODS = frozenset({
    "map",
    "filter",
    "slice",
    "concat",
    "splice",
    "flat",
    "flatMap",
    "sort",
    "reverse",
    "toSorted",
    "toReversed",
    "toSpliced",
})

ARRAY_FACTORIES = frozenset({"from", "of"})

OBJECT_FACTORIES = frozenset({
    "create",
    "assign",
    "fromEntries",
    "keys",
    "values",
    "entries",
})

DEFAULT_VOCABULARY = Vocabulary(
    array_properties=ARRAY_PROPERTIES,
    object_properties=OBJECT_PROPERTIES,
    array_names=ARRAY_NAMES,
    object_names=OBJECT_NAMES,
    array_name_patterns=ARRAY_NAME_PATTERNS,
    object_name_patterns=OBJECT_NAME_PATTERNS,
    arraylike_constructors=ARRAYLIKE_CONSTRUCTORS,
    array_methods=ARRAY_METHODS,
    array_factories=ARRAY_FACTORIES,
    object_factories=OBJECT_FACTORIES,
)


def extend_vocabulary(
    base: Vocabulary = DEFAULT_VOCABULARY,
    *,
    array_names: Iterable[str] = (),
    object_names: Iterable[str] = (),
    array_properties: Iterable[str] = (),
    object_properties: Iterable[str] = (),
    arraylike_constructors: Iterable[str] = (),
) -> Vocabulary:
    """Return a copy of ``base`` with extra names merged in."""
    return replace(
        base,
        array_names=base.array_names | frozenset(array_names),
        object_names=base.object_names | frozenset(object_names),
        array_properties=base.array_properties | frozenset(array_properties),
        object_properties=(
            base.object_properties | frozenset(object_properties)
        ),
        arraylike_constructors=(
            base.arraylike_constructors | frozenset(arraylike_constructors)
        ),
    )
