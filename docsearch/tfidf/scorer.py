"""
TF-IDF scorer and ranker.

Formula:
    score(query, doc) = Σ tf(term, doc) × idf(term)   over every query term

Where:
    tf(term, doc) = count(term in doc) / total terms in doc    (0.0 for empty doc)
    idf(term)     = log10(N / df(term))                        (0.0 for empty corpus)
    N             = number of documents in the corpus
    df(term)      = documents containing term (1 if never seen)

Query terms are not deduplicated: "cat cat" weighs CAT twice.
Ranking scans every document; there is no inverted index.
"""

import math
from typing import Dict, List, Optional, Tuple

from .model import CorpusModel
from .tokenizer import Lexer

SearchResult = Tuple[str, float]


def term_frequency(term: str, document_terms: Dict[str, int]) -> float:
    """
    Relative frequency of a term within one document.

    Args:
        term: Normalized term
        document_terms: The document's {term: count} map

    Returns:
        count / total term count, or 0.0 when the document has no terms
    """
    total_terms = sum(document_terms.values())
    if total_terms == 0:
        return 0.0
    return document_terms.get(term, 0) / total_terms


def inverse_document_frequency(term: str, corpus_size: int, document_frequency: Dict[str, int]) -> float:
    """
    log10(corpus_size / df) with unseen terms counted as appearing once.

    An unseen term therefore gets the highest possible weight instead of zero.
    """
    if corpus_size == 0:
        return 0.0
    doc_count = document_frequency.get(term, 1)
    return math.log10(corpus_size / doc_count)


def score(query: str, document_terms: Dict[str, int], corpus_size: int, document_frequency: Dict[str, int]) -> float:
    """
    TF-IDF score of one document for a query.

    Args:
        query: Raw query text (tokenized here)
        document_terms: The document's {term: count} map
        corpus_size: Number of documents in the corpus
        document_frequency: Corpus-wide {term: document count}

    Returns:
        Sum of tf × idf over all query terms, punctuation included
    """
    rank = 0.0
    for term in Lexer(query):
        rank += term_frequency(term, document_terms) * inverse_document_frequency(
            term, corpus_size, document_frequency
        )
    return rank


def search(model: CorpusModel, query: str) -> List[SearchResult]:
    """
    Rank every document in the model against a query.

    Args:
        model: Built corpus model (read only)
        query: Raw query text

    Returns:
        [(doc_id, score), ...] covering the whole corpus, score descending,
        ties ordered by doc_id

    Example:
        >>> model = build_model([("A", "the cat sat"), ("B", "the dog sat")])
        >>> search(model, "cat")
        [('A', 0.1003...), ('B', 0.0)]
    """
    corpus_size = model.document_count()
    results = [
        (doc_id, score(query, terms, corpus_size, model.document_frequency))
        for doc_id, terms in model.document_terms.items()
    ]
    results.sort(key=lambda item: (-item[1], item[0]))
    return results


class TfIdfRanker:
    """
    Ranker bound to one corpus model snapshot.

    The model is only read, so a single ranker can serve concurrent requests.
    """

    def __init__(self, model: CorpusModel):
        self.model = model

    def search(self, query: str, limit: Optional[int] = None) -> List[SearchResult]:
        """
        Rank documents for a query.

        Args:
            query: Raw query text
            limit: Keep only the first N results (None or 0 = all)

        Returns:
            [(doc_id, score), ...] score descending

        Raises:
            ValueError: Negative limit
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        results = search(self.model, query)
        if limit:
            return results[:limit]
        return results
