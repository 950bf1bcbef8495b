"""Term repository — read-only queries over the bound dictionary table.

Architecture::

    ┌────────────────────────────────────────────────────────────────────┐
    │                        TermRepository                              │
    │                                                                    │
    │   ctx: RepositoryContext   ← store + binding + prepared SQL        │
    │                                                                    │
    │   list_terms("")        → every non-null term, A→Z, capped         │
    │   list_terms("50%")     → terms containing "50%" literally         │
    │   get_term("Torque")    → TermRecord | None (exact match)          │
    │   count()               → rows in the bound table                  │
    └────────────────────────────────────────────────────────────────────┘

Ordering is ordinal lowercase comparison, ascending. Any ``sqlite3.Error``
surfaces as :class:`~termdict.core.errors.RepositoryError`; nothing is
retried here.

Tags:
    repository, database, sqlite, read-only, termdict
"""

from __future__ import annotations

import sqlite3
from dataclasses import asdict, dataclass
from typing import Any

from termdict.core.context import LIKE_ESCAPE, RepositoryContext
from termdict.core.errors import RepositoryError


@dataclass(frozen=True, slots=True)
class TermRecord:
    """One dictionary row, fetched on demand and never cached."""

    term: str
    definition: str | None = None
    audio_ref: str | None = None
    link_ref: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def escape_like(text: str) -> str:
    """Escape ``%``, ``_`` and the escape character for a ``LIKE ... ESCAPE``."""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _text(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


class TermRepository:
    """Read-only query surface built against a fixed :class:`RepositoryContext`."""

    def __init__(self, ctx: RepositoryContext) -> None:
        self.ctx = ctx

    def _rows(self, sql: str, params: tuple = (), *, action: str) -> list[Any]:
        try:
            return self.ctx.store.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to {action}: {exc}", cause=exc).with_context(
                table=self.ctx.binding.table_name
            ) from exc

    def list_terms(self, query: str = "") -> list[str]:
        """All terms, or those containing *query* case-insensitively.

        Results are sorted ascending by lowercase value and capped at the
        context limit. ``%``, ``_`` and ``\\`` in *query* match literally.
        """
        if query:
            rows = self._rows(
                self.ctx.queries.search_terms,
                (f"%{escape_like(query)}%",),
                action="search terms",
            )
        else:
            rows = self._rows(self.ctx.queries.list_terms, action="list terms")

        terms = [t for t in (_text(row[0]) for row in rows) if t]
        terms.sort(key=str.lower)
        return terms

    def get_term(self, term: str) -> TermRecord | None:
        """Exact (case-sensitive) lookup; ``None`` when the term does not exist."""
        rows = self._rows(self.ctx.queries.detail_by_term, (term,), action="fetch term")
        if not rows:
            return None

        row = rows[0]
        has_link = self.ctx.binding.link_column is not None
        return TermRecord(
            term=_text(row["term"]) or "",
            definition=_text(row["definition"]),
            audio_ref=_text(row["audio"]),
            link_ref=(_text(row["link"]) or None) if has_link else None,
        )

    def count(self) -> int:
        """Number of rows in the bound table."""
        rows = self._rows(self.ctx.queries.count, action="count rows")
        return int(rows[0][0]) if rows else 0


__all__ = [
    "TermRecord",
    "TermRepository",
    "escape_like",
]
