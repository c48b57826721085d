"""
Index storage - JSON persistence for the corpus model

File layout (key order is not significant):
{
    "documentFrequency": {"CAT": 1, "THE": 2, ...},
    "documentTerms": {
        "docs/a.xhtml": {"THE": 1, "CAT": 1, ...},
        ...
    }
}

Loading validates the structure with pydantic. A server cannot run without a
valid model, so every structural problem surfaces as IndexFormatError.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, ValidationError

from .errors import IndexFormatError
from .tfidf.model import CorpusModel

logger = logging.getLogger(__name__)


class IndexFile(BaseModel):
    """Schema of a persisted corpus model"""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", strict=True)

    document_frequency: Dict[str, NonNegativeInt] = Field(..., alias="documentFrequency")
    document_terms: Dict[str, Dict[str, NonNegativeInt]] = Field(..., alias="documentTerms")


def dumps_model(model: CorpusModel) -> str:
    """Serialize a model to JSON text"""
    return json.dumps(model.to_dict(), ensure_ascii=False)


def loads_model(text: Union[str, bytes]) -> CorpusModel:
    """
    Deserialize a model from JSON text

    Raises:
        IndexFormatError: Invalid JSON or unexpected structure
    """
    try:
        index_file = IndexFile.model_validate_json(text)
    except ValidationError as e:
        raise IndexFormatError(f"Invalid index structure: {e}") from e

    return CorpusModel(
        document_frequency=index_file.document_frequency,
        document_terms=index_file.document_terms,
    )


def save_model(model: CorpusModel, path: Union[str, Path]):
    """
    Write a model to a JSON file

    Args:
        model: Corpus model to persist
        path: Target file (parent directories are created)
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Writing index to {path} ...")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(model.to_dict(), f, ensure_ascii=False)
    logger.info(f"Written index to {path} ({model.document_count()} documents)")


def load_model(path: Union[str, Path]) -> CorpusModel:
    """
    Load a model from a JSON file

    Raises:
        IndexFormatError: File missing, unreadable or malformed
    """
    path = Path(path)
    try:
        content = path.read_bytes()
    except OSError as e:
        raise IndexFormatError(f"Unable to read index file {path}: {e}") from e

    model = loads_model(content)
    logger.info(f"Loaded index {path}: {model.document_count()} documents")
    return model
