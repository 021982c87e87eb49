"""
Tests for the "more like this" similarity query builder.
"""

from unittest.mock import patch

import pytest

from textknn.exceptions import DatabaseError, SearchError, ValidationError
from textknn.models import Occur
from textknn.search.more_like_this import (
    DEFAULT_MAX_QUERY_TERMS,
    DEFAULT_MIN_DOC_FREQ,
    DEFAULT_MIN_TERM_FREQ,
    MoreLikeThis,
)
from textknn.search.query import TermQuery


@pytest.fixture
def mlt(reader, analyzer) -> MoreLikeThis:
    builder = MoreLikeThis(reader, analyzer)
    builder.set_field_names(["body"])
    builder.min_doc_freq = 1
    builder.min_term_freq = 1
    return builder


def query_terms(query):
    return [clause.query.term for clause in query.clauses]


class TestMoreLikeThisDefaults:
    """Test default thresholds."""

    def test_defaults(self, reader, analyzer) -> None:
        builder = MoreLikeThis(reader, analyzer)

        assert builder.min_term_freq == DEFAULT_MIN_TERM_FREQ == 2
        assert builder.min_doc_freq == DEFAULT_MIN_DOC_FREQ == 5
        assert builder.max_query_terms == DEFAULT_MAX_QUERY_TERMS == 25
        assert builder.max_doc_freq is None
        assert builder.boost is False

    def test_default_thresholds_drop_rare_terms(
        self, reader, analyzer, sport_and_economy_index
    ) -> None:
        builder = MoreLikeThis(reader, analyzer)
        builder.set_field_names(["body"])

        # Every term is in fewer than five documents
        assert len(builder.like("body", "match match goal goal")) == 0


class TestMoreLikeThisQueries:
    """Test generated similarity queries."""

    def test_like_builds_should_term_clauses(self, mlt, sport_and_economy_index) -> None:
        query = mlt.like("body", "interest rates")

        assert set(query_terms(query)) == {"interest", "rates"}
        assert all(clause.occur is Occur.SHOULD for clause in query.clauses)
        assert all(isinstance(clause.query, TermQuery) for clause in query.clauses)
        assert all(clause.query.field == "body" for clause in query.clauses)

    def test_unknown_terms_are_dropped(self, mlt, sport_and_economy_index) -> None:
        query = mlt.like("body", "quantum chromodynamics goal")

        assert query_terms(query) == ["goal"]

    def test_min_term_freq(self, mlt, sport_and_economy_index) -> None:
        mlt.min_term_freq = 2

        assert query_terms(mlt.like("body", "match match goal")) == ["match"]

    def test_min_and_max_doc_freq(self, mlt, sport_and_economy_index) -> None:
        # "match" is in three documents, "goal" in one
        mlt.min_doc_freq = 2
        assert query_terms(mlt.like("body", "match goal")) == ["match"]

        mlt.min_doc_freq = 1
        mlt.max_doc_freq = 2
        assert query_terms(mlt.like("body", "match goal")) == ["goal"]

    def test_terms_ranked_by_tf_idf(self, mlt, sport_and_economy_index) -> None:
        # Rare "goal" outranks common "match" at equal term frequency
        assert query_terms(mlt.like("body", "match goal")) == ["goal", "match"]

    def test_max_query_terms(self, mlt, sport_and_economy_index) -> None:
        mlt.max_query_terms = 1

        assert len(mlt.like("body", "interest rates bank markets")) == 1

    def test_word_length_and_stop_words(self, mlt, sport_and_economy_index) -> None:
        mlt.min_word_len = 5
        assert "bank" not in query_terms(mlt.like("body", "bank rates interest"))

        mlt.min_word_len = 0
        mlt.max_word_len = 4
        assert query_terms(mlt.like("body", "bank interest")) == ["bank"]

        mlt.max_word_len = 0
        mlt.set_stop_words(["bank"])
        assert "bank" not in query_terms(mlt.like("body", "bank interest"))

    def test_boost_relative_to_best_term(self, mlt, sport_and_economy_index) -> None:
        mlt.boost = True
        query = mlt.like("body", "goal match")
        boosts = [clause.query.boost for clause in query.clauses]

        assert boosts[0] == pytest.approx(1.0)
        assert 0 < boosts[1] < 1.0

    def test_uses_field_with_highest_doc_freq(self, writer, reader, analyzer) -> None:
        writer.add_document({"title": "goal", "body": "goal"})
        writer.add_document({"title": "other", "body": "goal"})

        builder = MoreLikeThis(reader, analyzer)
        builder.set_field_names(["title", "body"])
        builder.min_doc_freq = 1
        builder.min_term_freq = 1

        query = builder.like("title", "goal")

        assert query.clauses[0].query.field == "body"

    def test_retrieve_interesting_terms(self, mlt, sport_and_economy_index) -> None:
        assert mlt.retrieve_interesting_terms("match goal") == ["goal", "match"]

    def test_requires_analyzer(self, reader) -> None:
        builder = MoreLikeThis(reader)

        with pytest.raises(ValidationError):
            builder.like("body", "goal")

    def test_requires_field_names(self, reader, analyzer) -> None:
        builder = MoreLikeThis(reader, analyzer)

        with pytest.raises(ValidationError):
            builder.set_field_names([])
        with pytest.raises(ValidationError):
            builder.retrieve_interesting_terms("goal")

    def test_storage_failure_becomes_search_error(self, mlt, reader) -> None:
        with patch.object(reader, "num_docs", side_effect=DatabaseError("disk gone")):
            with pytest.raises(SearchError) as exc_info:
                mlt.like("body", "goal")

        assert isinstance(exc_info.value.__cause__, DatabaseError)
