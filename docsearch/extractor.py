"""
Text extraction for indexing

Turns a source file into the plain text the indexer tokenizes:
1. XHTML/XML: character data of every element (via xmltodict)
2. HTML: Markdown text (via html2text)
3. PDF: Markdown text (via PyMuPDF4LLM)
4. Plain text formats: strict UTF-8 decode

Any failure for a single file is reported as ExtractionError, so the indexer
can skip that file and carry on with the rest of the corpus.
"""

import logging
from pathlib import Path
from typing import Any, List, Union

import html2text
import pymupdf4llm
import xmltodict

from .errors import ExtractionError

logger = logging.getLogger(__name__)

XML_FORMATS = {"xhtml", "xml"}
HTML_FORMATS = {"html", "htm"}
PDF_FORMATS = {"pdf"}
TEXT_FORMATS = {"txt", "md", "markdown", "rst", "csv", "log"}

SUPPORTED_EXTENSIONS = frozenset(
    f".{ext}" for ext in XML_FORMATS | HTML_FORMATS | PDF_FORMATS | TEXT_FORMATS
)


def _collect_xml_text(node: Any, parts: List[str]):
    """Walk an xmltodict tree collecting character data (attributes skipped)"""
    if node is None:
        return
    if isinstance(node, str):
        parts.append(node)
    elif isinstance(node, dict):
        for key, value in node.items():
            if key.startswith("@"):
                continue
            _collect_xml_text(value, parts)
    elif isinstance(node, list):
        for item in node:
            _collect_xml_text(item, parts)


class TextExtractor:
    """Extract indexable text from documents by file type"""

    def is_supported(self, path: Union[str, Path]) -> bool:
        return Path(path).suffix.lower() in SUPPORTED_EXTENSIONS

    def extract_text_from_xml(self, xml_source: bytes) -> str:
        """
        Extract character data from an XHTML/XML document

        Every text node is followed by a single space so that adjacent
        elements never glue their words together.

        Args:
            xml_source: XML bytes

        Returns:
            Concatenated text content
        """
        data = xmltodict.parse(
            xml_source,
            attr_prefix='@',
            cdata_key='#text',
            cdata_separator=' ',  # text before and after a child element is stored as one value
            force_list=False,
        )
        parts: List[str] = []
        _collect_xml_text(data, parts)
        return "".join(f"{part} " for part in parts)

    def extract_text_from_html(self, html_source: bytes) -> str:
        """
        Extract text from HTML and convert to Markdown format

        Args:
            html_source: HTML bytes

        Returns:
            Markdown text
        """
        html_string = html_source.decode('utf-8', errors='replace')

        converter = html2text.HTML2Text()
        converter.ignore_links = True
        converter.ignore_images = True
        converter.body_width = 0  # No line wrapping

        return converter.handle(html_string)

    def extract_text_from_pdf(self, pdf_source: bytes) -> str:
        """Extract text from PDF bytes using PyMuPDF4LLM (Markdown output)"""
        import pymupdf

        doc = pymupdf.open(stream=pdf_source, filetype="pdf")
        try:
            logger.debug(f"PDF has {len(doc)} pages, extracting text...")
            return pymupdf4llm.to_markdown(doc)
        finally:
            doc.close()

    def extract_text_from_txt(self, txt_source: bytes) -> str:
        """Decode plain text (strict UTF-8)"""
        return txt_source.decode('utf-8')

    def extract_text(self, file_content: bytes, file_type: str, source: str = "<bytes>") -> str:
        """
        Extract text from file content based on type

        Args:
            file_content: File content as bytes
            file_type: File extension (.xhtml, .pdf, .txt, ...)
            source: Name used in error messages

        Returns:
            Extracted text

        Raises:
            ExtractionError: Unsupported type or unparseable content
        """
        file_ext = file_type.lower()
        if file_ext.startswith('.'):
            file_ext = file_ext[1:]

        if file_ext in XML_FORMATS:
            handler = self.extract_text_from_xml
        elif file_ext in HTML_FORMATS:
            handler = self.extract_text_from_html
        elif file_ext in PDF_FORMATS:
            handler = self.extract_text_from_pdf
        elif file_ext in TEXT_FORMATS:
            handler = self.extract_text_from_txt
        else:
            raise ExtractionError(source, f"unsupported file type: {file_type}")

        try:
            return handler(file_content)
        except Exception as e:
            raise ExtractionError(source, str(e)) from e

    def extract(self, path: Union[str, Path]) -> str:
        """
        Read a file and extract its text

        Raises:
            ExtractionError: File unreadable or content unparseable
        """
        path = Path(path)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise ExtractionError(path, str(e)) from e

        text = self.extract_text(content, path.suffix, source=str(path))
        logger.debug(f"Extracted {len(text)} chars from {path}")
        return text
