"""
Corpus model - per-document term counts plus corpus-wide document frequencies.

Structure:
    document_frequency: {term: number of documents containing term}
    document_terms:     {doc_id: {term: count}}

The model is append-only. document_frequency stays exact as long as each
document id is added once; re-adding an id replaces its term counts but keeps
the old document frequency contribution.
"""

import logging
from collections import Counter
from typing import Any, Dict, Optional

from .tokenizer import Lexer

logger = logging.getLogger(__name__)

TermFreq = Dict[str, int]


class CorpusModel:
    """Queryable TF-IDF statistics for a corpus of documents"""

    def __init__(
        self,
        document_frequency: Optional[Dict[str, int]] = None,
        document_terms: Optional[Dict[str, TermFreq]] = None,
    ):
        self.document_frequency: Dict[str, int] = document_frequency or {}
        self.document_terms: Dict[str, TermFreq] = document_terms or {}

    def add_document(self, doc_id: str, text: str) -> TermFreq:
        """
        Tokenize a document and fold its terms into the model.

        Each distinct term of the document bumps its document frequency by
        exactly one, no matter how often it occurs.

        Args:
            doc_id: Stable document identifier (e.g. file path)
            text: Extracted document text

        Returns:
            The document's term count mapping
        """
        term_freq = dict(Counter(Lexer(text)))

        for term in term_freq:
            self.document_frequency[term] = self.document_frequency.get(term, 0) + 1

        if doc_id in self.document_terms:
            logger.warning(
                f"Document {doc_id} re-added: term counts replaced, document frequencies not retracted"
            )
        self.document_terms[doc_id] = term_freq

        logger.debug(f"{doc_id} has {len(term_freq)} distinct terms")
        return term_freq

    def document_count(self) -> int:
        """Number of documents in the corpus"""
        return len(self.document_terms)

    def __len__(self) -> int:
        return self.document_count()

    def __contains__(self, doc_id) -> bool:
        return doc_id in self.document_terms

    def __eq__(self, other) -> bool:
        if not isinstance(other, CorpusModel):
            return NotImplemented
        return (
            self.document_frequency == other.document_frequency
            and self.document_terms == other.document_terms
        )

    def __repr__(self) -> str:
        return f"CorpusModel(documents={len(self.document_terms)}, terms={len(self.document_frequency)})"

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping in persisted form (JSON-ready)"""
        return {
            "documentFrequency": dict(self.document_frequency),
            "documentTerms": {doc_id: dict(tf) for doc_id, tf in self.document_terms.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CorpusModel":
        """Rebuild a model from the mapping produced by to_dict()"""
        return cls(
            document_frequency=dict(data["documentFrequency"]),
            document_terms={doc_id: dict(tf) for doc_id, tf in data["documentTerms"].items()},
        )


def document_count(model: CorpusModel) -> int:
    """Corpus size accessor used by reporting code"""
    return model.document_count()
