"""
Unit tests for TF-IDF scoring and ranking.
"""

import math

import pytest
from docsearch.tfidf.index_builder import build_model
from docsearch.tfidf.model import CorpusModel
from docsearch.tfidf.scorer import (
    TfIdfRanker,
    inverse_document_frequency,
    score,
    search,
    term_frequency,
)


class TestTermFrequency:
    """Test tf = count / total terms"""

    def test_basic(self):
        assert term_frequency("CAT", {"CAT": 1, "SAT": 3}) == 0.25

    def test_missing_term(self):
        assert term_frequency("DOG", {"CAT": 1}) == 0.0

    def test_empty_document_is_zero(self):
        """Empty documents give 0.0, never NaN"""
        tf = term_frequency("CAT", {})
        assert tf == 0.0
        assert not math.isnan(tf)


class TestInverseDocumentFrequency:
    """Test idf = log10(N / df)"""

    def test_basic(self):
        assert inverse_document_frequency("CAT", 10, {"CAT": 1}) == pytest.approx(1.0)
        assert inverse_document_frequency("CAT", 10, {"CAT": 10}) == 0.0

    def test_unseen_term_counts_as_one_document(self):
        """Unseen terms get the maximum weight instead of zero"""
        assert inverse_document_frequency("NEW", 100, {"CAT": 5}) == pytest.approx(2.0)

    def test_empty_corpus_is_zero(self):
        assert inverse_document_frequency("CAT", 0, {}) == 0.0

    def test_monotonic_in_document_frequency(self):
        """Rarer terms never weigh less than common ones"""
        corpus_size = 50
        document_frequency = {f"T{df}": df for df in range(1, corpus_size + 1)}
        idfs = [
            inverse_document_frequency(f"T{df}", corpus_size, document_frequency)
            for df in range(1, corpus_size + 1)
        ]

        assert all(a >= b for a, b in zip(idfs, idfs[1:]))


class TestScore:
    """Test query scoring against one document"""

    def test_duplicate_query_terms_amplify(self, cat_dog_model):
        """Repeating a query term doubles its contribution"""
        for doc_id, terms in cat_dog_model.document_terms.items():
            args = (terms, cat_dog_model.document_count(), cat_dog_model.document_frequency)
            assert score("cat cat", *args) == pytest.approx(2 * score("cat", *args))

    def test_duplicate_amplification_with_repeated_document_terms(self):
        model = build_model([("x", "zebra zebra lion"), ("y", "lion")])
        terms = model.document_terms["x"]
        args = (terms, 2, model.document_frequency)

        assert score("zebra zebra", *args) == pytest.approx(2 * score("zebra", *args))

    def test_punctuation_tokens_are_scored(self):
        model = build_model([("a", "hi !"), ("b", "yo")])

        result = score("!", model.document_terms["a"], 2, model.document_frequency)

        assert result == pytest.approx(0.5 * math.log10(2))

    def test_empty_query(self, cat_dog_model):
        assert score("", cat_dog_model.document_terms["A"], 2, cat_dog_model.document_frequency) == 0.0

    def test_empty_document(self):
        assert score("cat", {}, 3, {"CAT": 1}) == 0.0


class TestSearch:
    """Test full-corpus ranking"""

    def test_cat_dog_scenario(self, cat_dog_model):
        results = search(cat_dog_model, "cat")

        assert [doc_id for doc_id, _ in results] == ["A", "B"]
        assert results[0][1] == pytest.approx(math.log10(2) / 3)
        assert results[0][1] == pytest.approx(0.1003, abs=1e-4)
        assert results[1][1] == 0.0

    def test_common_terms_score_zero(self, cat_dog_model):
        """THE and SAT occur everywhere, so idf = 0"""
        results = search(cat_dog_model, "the sat")

        assert all(rank == 0.0 for _, rank in results)

    def test_empty_corpus(self):
        assert search(CorpusModel(), "anything") == []

    def test_covers_every_document(self):
        model = build_model([(f"doc{i}", f"word{i}") for i in range(25)])

        results = search(model, "word3")

        assert len(results) == 25
        assert results[0][0] == "doc3"

    def test_sorted_descending(self):
        model = build_model([
            ("low", "apple pear pear pear"),
            ("high", "apple"),
            ("none", "pear"),
            ("mid", "apple pear"),
        ])

        scores = [rank for _, rank in search(model, "apple")]

        assert scores == sorted(scores, reverse=True)

    def test_ties_broken_by_document_id(self):
        model = build_model([("c", "same text"), ("a", "same text"), ("b", "same text")])

        assert [doc_id for doc_id, _ in search(model, "same")] == ["a", "b", "c"]

    def test_empty_documents_keep_order_stable(self):
        """Zero-length documents score 0.0 and sort like any other tie"""
        model = build_model([("z_empty", ""), ("cat", "cat"), ("a_empty", "   "), ("dog", "dog")])

        results = search(model, "cat")

        assert all(not math.isnan(rank) for _, rank in results)
        assert [doc_id for doc_id, _ in results] == ["cat", "a_empty", "dog", "z_empty"]

    def test_single_document_corpus(self):
        """log10(1 / 1) = 0, so everything scores zero"""
        model = build_model([("only", "cat")])

        assert search(model, "cat") == [("only", 0.0)]


class TestTfIdfRanker:
    """Test ranker wrapper with presentation truncation"""

    def test_full_results_by_default(self, cat_dog_model):
        ranker = TfIdfRanker(cat_dog_model)

        assert ranker.search("cat") == search(cat_dog_model, "cat")

    def test_limit(self, cat_dog_model):
        results = TfIdfRanker(cat_dog_model).search("cat", limit=1)

        assert [doc_id for doc_id, _ in results] == ["A"]

    def test_zero_limit_means_all(self, cat_dog_model):
        assert len(TfIdfRanker(cat_dog_model).search("cat", limit=0)) == 2

    def test_negative_limit_rejected(self, cat_dog_model):
        """A negative limit must not silently drop the last documents"""
        with pytest.raises(ValueError):
            TfIdfRanker(cat_dog_model).search("cat", limit=-1)
