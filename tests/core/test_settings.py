"""Tests for ``termdict.core.settings``."""

from __future__ import annotations

from pathlib import Path

from termdict.core.settings import TermdictSettings, get_settings


class TestTermdictSettings:
    def test_defaults(self, monkeypatch):
        for key in ("TERMDICT_DB_PATH", "TERMDICT_PORT", "TERMDICT_DB_TABLE"):
            monkeypatch.delenv(key, raising=False)
        s = TermdictSettings(_env_file=None)
        assert s.db_path == Path("database.db")
        assert s.port == 3000
        assert s.list_limit == 10_000
        assert s.icon_names == ["ic1.ico", "ic2.ico", "ic3.ico", "ic4.ico"]
        assert s.schema_override() == (None, None, None, None, None)

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("TERMDICT_DB_PATH", "/data/words.db")
        monkeypatch.setenv("TERMDICT_PORT", "8080")
        monkeypatch.setenv("TERMDICT_DB_TABLE", "words")
        s = TermdictSettings(_env_file=None)
        assert s.db_path == Path("/data/words.db")
        assert s.port == 8080
        assert s.db_table == "words"

    def test_unknown_variables_are_ignored(self, monkeypatch):
        monkeypatch.setenv("TERMDICT_NOT_A_SETTING", "x")
        TermdictSettings(_env_file=None)

    def test_schema_override_order(self):
        s = TermdictSettings(
            db_table="t",
            db_term_col="w",
            db_definition_col="m",
            db_audio_col="a",
            db_link_col="l",
            _env_file=None,
        )
        assert s.schema_override() == ("t", "w", "m", "a", "l")


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
