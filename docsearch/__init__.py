"""
docsearch - minimal TF-IDF document search engine

Build an index over a folder of documents, persist it as JSON and rank
documents against free-text queries from the command line or over HTTP.
"""

from .tfidf import CorpusModel, build_model, document_count, search

__all__ = ["CorpusModel", "build_model", "document_count", "search"]
