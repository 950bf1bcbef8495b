"""Tests for ``termdict.core.connection``."""

from __future__ import annotations

import sqlite3

import pytest

from termdict.core.connection import SqliteStore, open_store, quote_ident
from termdict.core.errors import MissingConfigError


class TestOpenStore:
    def test_missing_file(self, tmp_path):
        with pytest.raises(MissingConfigError, match="not found"):
            open_store(tmp_path / "absent.db")

    def test_directory_is_not_a_store(self, tmp_path):
        with pytest.raises(MissingConfigError):
            open_store(tmp_path)

    def test_info(self, words_db):
        store, info = open_store(words_db)
        try:
            assert isinstance(store, SqliteStore)
            assert info.resolved_path == str(words_db.resolve())
            assert info.read_only is True
        finally:
            store.close()

    def test_is_read_only(self, words_db):
        store, _ = open_store(words_db)
        try:
            with pytest.raises(sqlite3.OperationalError, match="readonly"):
                store.execute("INSERT INTO words VALUES ('x', 'y', 'z', 'w')")
        finally:
            store.close()

    def test_garbage_file_fails_on_first_read(self, tmp_path):
        path = tmp_path / "garbage.db"
        path.write_bytes(b"this is not an sqlite database, not even close" * 20)
        store, _ = open_store(path)
        try:
            with pytest.raises(sqlite3.DatabaseError):
                store.execute("SELECT 1 FROM sqlite_master")
        finally:
            store.close()


class TestSqliteStore:
    def test_rows_are_addressable_by_name(self, words_db):
        store, _ = open_store(words_db)
        try:
            row = store.execute("SELECT word AS term FROM words WHERE word = ?", ("apple",)).fetchone()
            assert row["term"] == "apple"
            assert store.fetchall() == []
        finally:
            store.close()

    def test_fetch_before_execute(self):
        store = SqliteStore(sqlite3.connect(":memory:"))
        assert store.fetchone() is None
        assert store.fetchall() == []
        store.close()


class TestQuoteIdent:
    def test_plain(self):
        assert quote_ident("words") == '"words"'

    def test_embedded_quote(self):
        assert quote_ident('we"ird') == '"we""ird"'
