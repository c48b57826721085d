"""
TF-IDF index builder - folds extracted document texts into a corpus model.

Two entry points:
- build_model(): any iterable of (doc_id, text) pairs
- index_folder(): recursive directory walk + text extraction

A document whose text cannot be extracted is logged and skipped; one bad
file never aborts the whole build.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

from ..errors import ExtractionError
from ..extractor import TextExtractor
from .model import CorpusModel

logger = logging.getLogger(__name__)


def build_model(documents: Iterable[Tuple[str, str]]) -> CorpusModel:
    """
    Build a corpus model from (doc_id, text) pairs.

    Args:
        documents: Iterable of (doc_id, text); each id should appear once

    Returns:
        Populated CorpusModel

    Example:
        >>> model = build_model([("A", "the cat sat"), ("B", "the dog sat")])
        >>> model.document_frequency
        {'THE': 2, 'CAT': 1, 'SAT': 2, 'DOG': 1}
    """
    model = CorpusModel()
    for doc_id, text in documents:
        model.add_document(doc_id, text)
    return model


def iter_folder_documents(
    root: Union[str, Path],
    extractor: Optional[TextExtractor] = None,
) -> Iterator[Tuple[str, str]]:
    """
    Walk a folder recursively and yield (path, text) for every supported file.

    Entries are visited in sorted order so builds are reproducible.
    Files with unsupported extensions and files that fail extraction are skipped.

    Args:
        root: Directory to index
        extractor: Text extractor (default: TextExtractor())

    Yields:
        (file path as string, extracted text)
    """
    extractor = extractor or TextExtractor()
    root = Path(root)

    for entry in sorted(root.iterdir()):
        if entry.is_dir():
            yield from iter_folder_documents(entry, extractor)
            continue

        if not extractor.is_supported(entry):
            logger.debug(f"Skipping {entry}: unsupported extension {entry.suffix!r}")
            continue

        try:
            text = extractor.extract(entry)
        except ExtractionError as e:
            logger.warning(f"Skipping {entry}: {e.reason}")
            continue

        yield str(entry), text


def index_folder(root: Union[str, Path], extractor: Optional[TextExtractor] = None) -> CorpusModel:
    """
    Build a corpus model from every supported document under a folder.

    Args:
        root: Directory to index
        extractor: Text extractor (default: TextExtractor())

    Returns:
        Populated CorpusModel
    """
    logger.info(f"Indexing folder {root}")
    model = build_model(iter_folder_documents(root, extractor))
    logger.info(
        f"Indexed {model.document_count()} documents, {len(model.document_frequency)} unique terms"
    )
    return model
