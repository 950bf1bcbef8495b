"""Tests for ``termdict.core.repository`` — listing, search and exact lookup."""

from __future__ import annotations

import pytest

from termdict.core.connection import open_store
from termdict.core.context import build_context
from termdict.core.errors import RepositoryError
from termdict.core.repository import TermRecord, TermRepository, escape_like
from termdict.core.schema import infer


@pytest.fixture()
def repo(repo_ctx) -> TermRepository:
    return TermRepository(repo_ctx)


class TestEscapeLike:
    def test_wildcards(self):
        assert escape_like("50%") == "50\\%"
        assert escape_like("a_b") == "a\\_b"

    def test_escape_character_first(self):
        assert escape_like("\\%") == "\\\\\\%"

    def test_plain_text_unchanged(self):
        assert escape_like("apple") == "apple"


class TestListTerms:
    def test_all_terms_sorted_case_insensitively(self, repo, sorted_terms):
        assert repo.list_terms() == sorted_terms

    def test_null_and_empty_terms_are_excluded(self, repo):
        terms = repo.list_terms()
        assert None not in terms
        assert "" not in terms

    def test_search_is_case_insensitive_substring(self, repo):
        assert repo.list_terms("APP") == ["apple"]
        assert repo.list_terms("an") == ["Banana"]

    def test_search_results_contain_query_and_are_sorted(self, repo):
        for q in ["a", "b", "5", "e"]:
            result = repo.list_terms(q)
            assert result, q
            assert all(q.lower() in t.lower() for t in result)
            assert result == sorted(result, key=str.lower)

    def test_percent_is_literal(self, repo):
        assert repo.list_terms("50%") == ["50% off"]

    def test_underscore_is_literal(self, repo):
        assert repo.list_terms("_") == ["a_b"]

    def test_escape_character_is_literal(self, repo):
        assert repo.list_terms("\\") == ["back\\slash"]

    def test_no_match(self, repo):
        assert repo.list_terms("zzz") == []

    def test_cap(self, repo_ctx, sorted_terms):
        capped = TermRepository(build_context(repo_ctx.store, repo_ctx.binding, limit=3))
        assert capped.list_terms() == sorted_terms[:3]
        assert len(capped.list_terms("a")) == 3

    def test_non_text_terms_are_stringified(self, make_db):
        path = make_db({"nums": (("n", "d", "a"), [(2, "two", None), (10, "ten", None)])})
        store, _ = open_store(path)
        try:
            repo = TermRepository(build_context(store, infer(store)))
            assert repo.list_terms() == ["10", "2"]
        finally:
            store.close()


class TestGetTerm:
    def test_full_record(self, repo):
        assert repo.get_term("apple") == TermRecord(
            term="apple",
            definition="A **fruit**\nred or green",
            audio_ref="a1.mp3  a2.mp3",
            link_ref="https://en.wikipedia.org/wiki/Apple",
        )

    def test_exact_match_is_case_sensitive(self, repo):
        assert repo.get_term("Apple") is None
        assert repo.get_term("banana") is None
        assert repo.get_term("Banana") is not None

    def test_missing(self, repo):
        assert repo.get_term("durian") is None

    def test_no_wildcards_in_exact_match(self, repo):
        assert repo.get_term("50%") is None

    def test_null_definition_stays_none(self, repo):
        record = repo.get_term("cherry")
        assert record is not None
        assert record.definition is None
        assert record.link_ref is None

    def test_without_link_column(self, make_db):
        path = make_db({"words": (("word", "meaning", "audio"), [("x", "y", "z.mp3")])})
        store, _ = open_store(path)
        try:
            repo = TermRepository(build_context(store, infer(store)))
            assert repo.get_term("x") == TermRecord("x", "y", "z.mp3", None)
        finally:
            store.close()

    def test_to_dict(self, repo):
        d = repo.get_term("Banana").to_dict()
        assert d["term"] == "Banana"
        assert d["audio_ref"] is None


class TestCount:
    def test_counts_every_row(self, repo):
        assert repo.count() == 10


class TestFailures:
    def test_store_failure_surfaces_as_repository_error(self, words_db):
        store, _ = open_store(words_db)
        repo = TermRepository(build_context(store, infer(store)))
        store.close()

        with pytest.raises(RepositoryError) as exc_info:
            repo.list_terms()
        assert exc_info.value.context.table == "words"
