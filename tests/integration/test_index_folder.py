"""Integration tests: index a real folder of documents and search it

Uses the fixture corpus in tests/fixtures/corpus:
- cat.xhtml           "the" + "cat sat"
- nested/dog.xhtml    "the" + "dog sat"
- broken.xhtml        malformed XML (skipped)
- notes.unknown       unsupported extension (skipped)
"""

import logging
import math

import pytest

from docsearch.errors import ExtractionError
from docsearch.extractor import TextExtractor
from docsearch.storage import load_model, save_model
from docsearch.tfidf.index_builder import index_folder, iter_folder_documents
from docsearch.tfidf.scorer import search

pytestmark = pytest.mark.integration


def test_indexes_supported_documents(corpus_dir):
    model = index_folder(corpus_dir)

    assert sorted(model.document_terms) == sorted([
        str(corpus_dir / "cat.xhtml"),
        str(corpus_dir / "nested" / "dog.xhtml"),
    ])
    assert model.document_frequency == {"THE": 2, "CAT": 1, "SAT": 2, "DOG": 1}


def test_broken_document_is_skipped(corpus_dir, caplog):
    with caplog.at_level(logging.WARNING):
        documents = dict(iter_folder_documents(corpus_dir))

    assert str(corpus_dir / "broken.xhtml") not in documents
    assert "broken.xhtml" in caplog.text


def test_every_failing_document_is_skipped(corpus_dir):
    """A failing extractor never aborts the walk"""

    class FailingCatExtractor(TextExtractor):
        def extract(self, path):
            if path.name == "cat.xhtml":
                raise ExtractionError(path, "simulated failure")
            return super().extract(path)

    model = index_folder(corpus_dir, FailingCatExtractor())

    assert list(model.document_terms) == [str(corpus_dir / "nested" / "dog.xhtml")]


def test_walk_order_is_sorted(corpus_dir):
    ids = [doc_id for doc_id, _ in iter_folder_documents(corpus_dir)]

    assert ids == [str(corpus_dir / "cat.xhtml"), str(corpus_dir / "nested" / "dog.xhtml")]


def test_empty_folder(tmp_path):
    model = index_folder(tmp_path)

    assert model.document_count() == 0
    assert search(model, "anything") == []


def test_index_save_load_search(corpus_dir, tmp_path):
    """Full offline build -> persist -> load -> query cycle"""
    index_file = tmp_path / "index.json"
    save_model(index_folder(corpus_dir), index_file)

    results = search(load_model(index_file), "cat")

    assert results[0][0] == str(corpus_dir / "cat.xhtml")
    assert results[0][1] == pytest.approx(math.log10(2) / 3)
    assert results[1] == (str(corpus_dir / "nested" / "dog.xhtml"), 0.0)
