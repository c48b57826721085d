"""Shared pytest fixtures"""

import sys
from pathlib import Path

import pytest

# Add project root to path for docsearch imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from docsearch.tfidf.index_builder import build_model

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def cat_dog_model():
    """
    Two-document corpus used throughout the tests:
        A: "the cat sat" -> {THE, CAT, SAT}
        B: "the dog sat" -> {THE, DOG, SAT}
    """
    return build_model([("A", "the cat sat"), ("B", "the dog sat")])


@pytest.fixture
def corpus_dir():
    """Folder of fixture documents (two valid XHTML files, one broken, one unsupported)"""
    return FIXTURES_DIR / "corpus"


@pytest.fixture
def static_dir():
    """Static search page shipped with the project"""
    return project_root / "static"
