"""
Shared pytest fixtures for termdict tests.

This module provides:
- A quiet structlog configuration so tests never write logs to a stream
- ``make_db``: build a throwaway SQLite dictionary file under ``tmp_path``
- ``words_db`` / ``repo_ctx`` / ``op_ctx``: a populated dictionary opened
  read-only exactly the way the server opens it
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path
from typing import Any

import pytest
import structlog

from termdict.core.connection import open_store
from termdict.core.context import RepositoryContext, build_context
from termdict.core.schema import infer
from termdict.ops.context import OperationContext

WORD_ROWS: list[tuple[Any, ...]] = [
    ("apple", "A **fruit**\nred or green", "a1.mp3  a2.mp3", "https://en.wikipedia.org/wiki/Apple"),
    ("Banana", "Force ($F$) equals mass times acceleration: $$F = ma$$", None, None),
    ("cherry", None, "", None),
    ("50% off", "discount", None, None),
    ("500", "number", None, None),
    ("a_b", "underscore", None, None),
    ("axb", "no underscore", None, None),
    ("back\\slash", "escape character", None, None),
    (None, "orphan definition", None, None),
    ("", "empty term", None, None),
]

SORTED_TERMS = ["50% off", "500", "a_b", "apple", "axb", "back\\slash", "Banana", "cherry"]


# =============================================================================
# Logging
# =============================================================================


def _quiet_structlog() -> None:
    structlog.reset_defaults()
    structlog.configure(
        processors=[structlog.processors.KeyValueRenderer()],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Route structlog to a no-op logger and keep entry points from reconfiguring it."""
    _quiet_structlog()
    monkeypatch.setattr("termdict.api.app.configure_logging", lambda **kwargs: None)
    monkeypatch.setattr("termdict.cli.app.configure_logging", lambda **kwargs: None)
    yield
    _quiet_structlog()


# =============================================================================
# SQLite dictionaries
# =============================================================================


MakeDb = Callable[..., Path]


@pytest.fixture()
def make_db(tmp_path: Path) -> MakeDb:
    """Factory: ``make_db(tables={"words": (columns, rows)}, name="x.db")``."""

    def _make(
        tables: dict[str, tuple[Sequence[str], Sequence[Sequence[Any]]]] | None = None,
        name: str = "dictionary.db",
    ) -> Path:
        path = tmp_path / name
        conn = sqlite3.connect(path)
        try:
            for table, (columns, rows) in (tables or {}).items():
                cols = ", ".join(f'"{c}"' for c in columns)
                conn.execute(f'CREATE TABLE "{table}" ({cols})')
                if rows:
                    marks = ", ".join("?" for _ in columns)
                    conn.executemany(f'INSERT INTO "{table}" VALUES ({marks})', rows)
            conn.commit()
        finally:
            conn.close()
        return path

    return _make


@pytest.fixture()
def words_db(make_db: MakeDb) -> Path:
    """Dictionary file with a four-column ``words`` table."""
    return make_db({"words": (("word", "meaning", "audio", "wiki"), WORD_ROWS)})


@pytest.fixture()
def repo_ctx(words_db: Path) -> Iterator[RepositoryContext]:
    """Read-only context over ``words_db`` with an inferred binding."""
    store, _info = open_store(words_db)
    ctx = build_context(store, infer(store))
    yield ctx
    store.close()


@pytest.fixture()
def op_ctx(repo_ctx: RepositoryContext) -> OperationContext:
    """Default OperationContext wired to ``repo_ctx``."""
    return OperationContext(repo_ctx=repo_ctx, caller="test")


@pytest.fixture()
def sorted_terms() -> list[str]:
    """Every non-empty term in ``WORD_ROWS``, in listing order."""
    return list(SORTED_TERMS)
