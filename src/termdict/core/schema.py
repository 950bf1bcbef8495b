"""
Schema inference — decide which table and columns hold the dictionary.

The backing store has no fixed contract. The first user table (in lexical
name order) is taken as the dictionary, and its first four columns, in
declared order, are read as (term, definition, audio, link). The link column
is optional. An explicit override naming the table and columns bypasses
inference entirely.

Manifesto:
    Inference is a pure function from (table name, ordered column names) to
    a :class:`SchemaBinding`, so it can be exercised against synthetic
    schemas. Only :func:`infer` and :func:`resolve_binding` touch a store,
    and only to read metadata.

    Column *position*, not name, decides the role. Reordering the columns of
    the backing table silently changes which column is read as what; this is
    a known fragility, kept because it is the observable behaviour.

Architecture:
    ::

        sqlite_master ──► first user table ──► PRAGMA table_info
                                                    │
                                                    ▼
                                  infer_binding(table, columns)
                                                    │
        override (table, term, def, audio[, link])  │
                 │                                  │
                 └──────────► resolve_binding ◄─────┘
                                    │
                                    ▼
                              SchemaBinding (immutable)

Examples:
    >>> infer_binding("words", ["word", "meaning", "audio_url", "wiki"])
    SchemaBinding(table='words', term='word', definition='meaning', audio='audio_url', link='wiki')

    >>> infer_binding("words", ["word", "meaning", "audio_url"]).link_column is None
    True

    >>> binding_from_override("words", "word", "meaning", None)
    Traceback (most recent call last):
    ...
    SchemaError: Partial schema override: ...

Tags:
    schema, inference, sqlite, termdict
"""

from __future__ import annotations

import sqlite3
from collections.abc import Sequence
from dataclasses import dataclass

from termdict.core.connection import Connection, quote_ident
from termdict.core.errors import RepositoryError, SchemaError
from termdict.core.logging import get_logger

logger = get_logger(__name__)

MIN_COLUMNS = 3

_FIRST_USER_TABLE_SQL = (
    "SELECT name FROM sqlite_master "
    "WHERE type='table' AND name NOT LIKE 'sqlite_%' "
    "ORDER BY name LIMIT 1"
)


@dataclass(frozen=True, slots=True)
class SchemaBinding:
    """Resolved mapping from roles (term/definition/audio/link) to identifiers.

    Created once at startup and never mutated afterwards.

    Attributes:
        table_name: Table holding the dictionary rows
        term_column: Headword column (exact-match lookups, search, ordering)
        definition_column: Raw markdown + math definition text
        audio_column: Space-separated pronunciation audio references
        link_column: Optional external reference link column
    """

    table_name: str
    term_column: str
    definition_column: str
    audio_column: str
    link_column: str | None = None

    def __post_init__(self) -> None:
        required = {
            "table": self.table_name,
            "term": self.term_column,
            "definition": self.definition_column,
            "audio": self.audio_column,
        }
        for role, value in required.items():
            if not value:
                raise SchemaError(f"Schema binding is missing the {role} identifier")

        roles = [self.term_column, self.definition_column, self.audio_column]
        if len(set(roles)) != len(roles):
            raise SchemaError(
                "Term, definition and audio columns must be distinct: "
                f"{self.term_column!r}, {self.definition_column!r}, {self.audio_column!r}"
            ).with_context(table=self.table_name)

    @property
    def columns(self) -> tuple[str, ...]:
        """Bound columns in role order (link omitted when absent)."""
        cols = (self.term_column, self.definition_column, self.audio_column)
        return cols + ((self.link_column,) if self.link_column else ())

    def to_dict(self) -> dict[str, str | None]:
        return {
            "table": self.table_name,
            "term": self.term_column,
            "definition": self.definition_column,
            "audio": self.audio_column,
            "link": self.link_column,
        }

    def __repr__(self) -> str:
        return (
            f"SchemaBinding(table={self.table_name!r}, term={self.term_column!r}, "
            f"definition={self.definition_column!r}, audio={self.audio_column!r}, "
            f"link={self.link_column!r})"
        )


# =============================================================================
# PURE INFERENCE
# =============================================================================


def infer_binding(table_name: str, columns: Sequence[str]) -> SchemaBinding:
    """Bind roles to the first four columns of *table_name* by position.

    Raises:
        SchemaError: fewer than three columns.
    """
    if len(columns) < MIN_COLUMNS:
        raise SchemaError(
            f'Table "{table_name}" must have at least {MIN_COLUMNS} columns '
            "[word, meaning, audio_url]"
        ).with_context(table=table_name, found=len(columns))

    term, definition, audio, *rest = columns[:4]
    return SchemaBinding(
        table_name=table_name,
        term_column=term,
        definition_column=definition,
        audio_column=audio,
        link_column=rest[0] if rest else None,
    )


def binding_from_override(
    table: str | None,
    term: str | None,
    definition: str | None,
    audio: str | None,
    link: str | None = None,
) -> SchemaBinding | None:
    """Build a binding from explicit values, or ``None`` when none are given.

    The table, term, definition and audio values must be supplied together.
    Anything in between (including a link column on its own) is rejected.

    Raises:
        SchemaError: partial override, or non-distinct role columns.
    """
    required = {"table": table, "term": term, "definition": definition, "audio": audio}
    supplied = [name for name, value in required.items() if value]

    if not supplied and not link:
        return None

    if len(supplied) != len(required):
        missing = [name for name, value in required.items() if not value]
        raise SchemaError(
            f"Partial schema override: missing {', '.join(missing)} "
            "(table, term, definition and audio must be supplied together)"
        ).with_context(missing=missing)

    return SchemaBinding(
        table_name=table,  # type: ignore[arg-type]
        term_column=term,  # type: ignore[arg-type]
        definition_column=definition,  # type: ignore[arg-type]
        audio_column=audio,  # type: ignore[arg-type]
        link_column=link or None,
    )


# =============================================================================
# STORE METADATA
# =============================================================================


def first_user_table(store: Connection) -> str | None:
    """Name of the first user table in lexical order, if any."""
    try:
        row = store.execute(_FIRST_USER_TABLE_SQL).fetchone()
    except sqlite3.Error as exc:
        raise RepositoryError(f"Failed to read schema: {exc}", cause=exc) from exc
    return row[0] if row else None


def table_columns(store: Connection, table: str) -> list[str]:
    """Column names of *table* in declared order (empty if it does not exist)."""
    try:
        rows = store.execute(f"PRAGMA table_info({quote_ident(table)})").fetchall()
    except sqlite3.Error as exc:
        raise RepositoryError(f"Failed to read columns: {exc}", cause=exc).with_context(
            table=table
        ) from exc
    return [row[1] for row in rows]


def infer(store: Connection) -> SchemaBinding:
    """Infer the binding from the store's first user table.

    Raises:
        SchemaError: no user table, or the table has fewer than three columns.
    """
    table = first_user_table(store)
    if table is None:
        raise SchemaError("No user table found in database")
    return infer_binding(table, table_columns(store, table))


def _check_exists(store: Connection, binding: SchemaBinding) -> None:
    available = table_columns(store, binding.table_name)
    if not available:
        raise SchemaError(
            f'Override table "{binding.table_name}" does not exist'
        ).with_context(table=binding.table_name)
    for column in binding.columns:
        if column not in available:
            raise SchemaError(
                f'Override column "{column}" not found in table "{binding.table_name}"'
            ).with_context(table=binding.table_name, column=column)


def resolve_binding(
    store: Connection,
    override: Sequence[str | None] = (),
) -> SchemaBinding:
    """Resolve the process-wide binding: explicit override first, else inference.

    Args:
        store: Read-only store connection.
        override: ``(table, term, definition, audio[, link])``; empty or all
            ``None`` means infer.
    """
    values = list(override) + [None] * (5 - len(override))
    binding = binding_from_override(*values[:5])

    if binding is not None:
        _check_exists(store, binding)
        logger.info("schema_override_applied", **binding.to_dict())
        return binding

    binding = infer(store)
    logger.info("schema_inferred", **binding.to_dict())
    return binding


__all__ = [
    "MIN_COLUMNS",
    "SchemaBinding",
    "binding_from_override",
    "first_user_table",
    "infer",
    "infer_binding",
    "resolve_binding",
    "table_columns",
]
