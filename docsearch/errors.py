"""
Error types for docsearch.

Every failure the package reports derives from DocSearchError, so callers can
tell recoverable per-item failures from fatal structural ones:

- ExtractionError: one document's text could not be obtained (skip it)
- EncodingError: a payload is not valid text (reject that operation)
- IndexFormatError: a persisted index is malformed (fatal at load time)
"""


class DocSearchError(Exception):
    """Base class for all docsearch errors"""


class ExtractionError(DocSearchError):
    """Text could not be extracted from a single document"""

    def __init__(self, source, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not extract text from {source}: {reason}")


class EncodingError(DocSearchError):
    """Query or document payload is not valid UTF-8 text"""


class IndexFormatError(DocSearchError):
    """Persisted corpus model does not match the expected structure"""
