"""Tests for ``termdict.core.errors``."""

from __future__ import annotations

import sqlite3

import pytest

from termdict.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    MissingConfigError,
    PlaybackFailure,
    RenderDegradation,
    RepositoryError,
    SchemaError,
    TermdictError,
    categorize_error,
)


class TestErrorContext:
    def test_to_dict_excludes_none(self):
        ctx = ErrorContext(table="words")
        assert ctx.to_dict() == {"table": "words"}

    def test_metadata_is_flattened(self):
        ctx = ErrorContext(term="apple", metadata={"found": 2})
        assert ctx.to_dict() == {"term": "apple", "found": 2}


class TestTermdictError:
    def test_defaults(self):
        err = TermdictError("boom")
        assert err.message == "boom"
        assert err.category is ErrorCategory.INTERNAL
        assert err.retryable is False
        assert str(err) == "boom"

    def test_cause_is_chained(self):
        cause = sqlite3.OperationalError("disk I/O error")
        err = RepositoryError("Failed to list terms", cause=cause)
        assert err.__cause__ is cause
        assert err.to_dict()["cause"] == "disk I/O error"

    def test_with_context_known_and_extra_keys(self):
        err = SchemaError("bad").with_context(table="words", column="meaning", found=2)
        assert err.context.table == "words"
        assert err.context.column == "meaning"
        assert err.context.metadata == {"found": 2}

    def test_with_context_returns_same_instance(self):
        err = SchemaError("bad")
        assert err.with_context(table="t") is err

    def test_to_dict(self):
        d = RepositoryError("nope").with_context(table="words").to_dict()
        assert d == {
            "error_type": "RepositoryError",
            "message": "nope",
            "category": "DATABASE",
            "retryable": False,
            "context": {"table": "words"},
        }

    def test_repr(self):
        assert repr(SchemaError("x")) == "SchemaError('x', category=CONFIG)"


class TestHierarchy:
    @pytest.mark.parametrize(
        ("cls", "category"),
        [
            (ConfigError, ErrorCategory.CONFIG),
            (SchemaError, ErrorCategory.CONFIG),
            (RepositoryError, ErrorCategory.DATABASE),
            (RenderDegradation, ErrorCategory.RENDER),
            (PlaybackFailure, ErrorCategory.PLAYBACK),
        ],
    )
    def test_default_categories(self, cls, category):
        err = cls("x")
        assert isinstance(err, TermdictError)
        assert err.category is category
        assert err.retryable is False

    def test_schema_error_is_config_error(self):
        assert issubclass(SchemaError, ConfigError)

    def test_missing_config_default_message(self):
        err = MissingConfigError("db_path")
        assert err.key == "db_path"
        assert "db_path" in err.message
        assert isinstance(err, ConfigError)


class TestCategorizeError:
    def test_termdict_error(self):
        assert categorize_error(RepositoryError("x")) is ErrorCategory.DATABASE

    def test_foreign_error_is_internal(self):
        assert categorize_error(ValueError("x")) is ErrorCategory.INTERNAL
