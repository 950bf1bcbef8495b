"""
Repository context — store handle + schema binding + prepared query text.

Built once at process start by :func:`build_context` and handed to every
:class:`~termdict.core.repository.TermRepository`. Nothing in it is mutated
after construction, so it can be shared by all requests.
"""

from __future__ import annotations

from dataclasses import dataclass

from termdict.core.connection import Connection, open_store, quote_ident
from termdict.core.errors import RepositoryError
from termdict.core.logging import get_logger
from termdict.core.schema import SchemaBinding, resolve_binding
from termdict.core.settings import TermdictSettings

logger = get_logger(__name__)

DEFAULT_LIST_LIMIT = 10_000

LIKE_ESCAPE = "\\"


@dataclass(frozen=True, slots=True)
class PreparedQueries:
    """SQL text for every read the repository issues, generated from a binding."""

    count: str
    list_terms: str
    search_terms: str
    detail_by_term: str

    @classmethod
    def for_binding(cls, binding: SchemaBinding, limit: int = DEFAULT_LIST_LIMIT) -> PreparedQueries:
        table = quote_ident(binding.table_name)
        term = quote_ident(binding.term_column)
        link = (
            f', {quote_ident(binding.link_column)} AS link' if binding.link_column else ""
        )
        return cls(
            count=f"SELECT COUNT(*) AS c FROM {table}",
            list_terms=(
                f"SELECT {term} AS term FROM {table} "
                f"WHERE {term} IS NOT NULL "
                f"ORDER BY {term} COLLATE NOCASE ASC LIMIT {int(limit)}"
            ),
            search_terms=(
                f"SELECT {term} AS term FROM {table} "
                f"WHERE {term} LIKE ? ESCAPE '{LIKE_ESCAPE}' "
                f"ORDER BY {term} COLLATE NOCASE ASC LIMIT {int(limit)}"
            ),
            detail_by_term=(
                f"SELECT {term} AS term, "
                f"{quote_ident(binding.definition_column)} AS definition, "
                f"{quote_ident(binding.audio_column)} AS audio"
                f"{link} FROM {table} WHERE {term} = ? LIMIT 1"
            ),
        )


@dataclass(frozen=True, slots=True)
class RepositoryContext:
    """Everything a repository needs, constructed once and shared read-only.

    Attributes:
        store: Read-only store connection.
        binding: The process-wide schema binding.
        queries: SQL text prepared from *binding*.
        limit: Cap applied to list and search results.
    """

    store: Connection
    binding: SchemaBinding
    queries: PreparedQueries
    limit: int = DEFAULT_LIST_LIMIT


def build_context(
    store: Connection,
    binding: SchemaBinding,
    *,
    limit: int = DEFAULT_LIST_LIMIT,
) -> RepositoryContext:
    """Assemble the context for *binding* over *store*."""
    return RepositoryContext(
        store=store,
        binding=binding,
        queries=PreparedQueries.for_binding(binding, limit),
        limit=limit,
    )


def open_context(settings: TermdictSettings) -> RepositoryContext:
    """Open the store and resolve the binding once, at process start.

    Logs the binding and the bound table's row count; a failing row count is
    only a warning. The caller owns the returned context's store and closes it
    at shutdown.

    Raises:
        MissingConfigError: the database file does not exist.
        SchemaError: no usable binding.
    """
    store, info = open_store(settings.db_path)
    try:
        binding = resolve_binding(store, settings.schema_override())
    except Exception:
        store.close()
        raise

    ctx = build_context(store, binding, limit=settings.list_limit)

    from termdict.core.repository import TermRepository

    try:
        rows = TermRepository(ctx).count()
        logger.info("store_ready", path=info.resolved_path, table=binding.table_name, rows=rows)
    except RepositoryError as exc:
        logger.warning("row_count_failed", table=binding.table_name, error=str(exc))
    return ctx


__all__ = [
    "DEFAULT_LIST_LIMIT",
    "LIKE_ESCAPE",
    "PreparedQueries",
    "RepositoryContext",
    "build_context",
    "open_context",
]
