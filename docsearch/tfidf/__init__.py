"""
TF-IDF (Term Frequency - Inverse Document Frequency) document ranking.

Components:
- tokenizer: Maximal-munch term extraction
- model: Corpus statistics (document frequencies + per-document term counts)
- index_builder: Folding document texts into a corpus model
- scorer: TF-IDF scoring and full-corpus ranking

Ranking scans every document for every query, which is fine for small
corpora. There is no inverted index.
"""

from .tokenizer import Lexer, tokenize
from .model import CorpusModel, document_count
from .index_builder import build_model, index_folder, iter_folder_documents
from .scorer import (
    TfIdfRanker,
    inverse_document_frequency,
    score,
    search,
    term_frequency,
)

__all__ = [
    "Lexer",
    "tokenize",
    "CorpusModel",
    "document_count",
    "build_model",
    "index_folder",
    "iter_folder_documents",
    "TfIdfRanker",
    "inverse_document_frequency",
    "score",
    "search",
    "term_frequency",
]
