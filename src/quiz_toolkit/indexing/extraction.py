"""
Binary-to-text extraction.

Turns an uploaded file into one string per page. Extraction never raises:
a file that cannot be read comes back as [EXTRACTION_FAILED] so ingestion
can record "no content extracted" instead of failing the upload.

Supported formats:
    .pdf           → PdfExtractor (pypdf)
    .txt / .md     → PlainTextExtractor (form feeds separate pages)

Usage:
    from quiz_toolkit.indexing.extraction import get_extractor, is_extraction_failure

    extractor = get_extractor("handbook.pdf")
    with open("handbook.pdf", "rb") as f:
        pages = extractor.extract(f)
    if is_extraction_failure(pages):
        ...
"""

import logging
from pathlib import PurePath
from typing import BinaryIO

from pypdf import PdfReader

from quiz_toolkit.base.indexer import BaseExtractor

logger = logging.getLogger(__name__)

EXTRACTION_FAILED = "Document content could not be extracted"


def is_extraction_failure(pages: list[str]) -> bool:
    """True when pages is the sentinel returned for an unreadable document."""
    return pages == [EXTRACTION_FAILED]


class PdfExtractor(BaseExtractor):
    """
    Page-by-page PDF text extraction with pypdf.

    Pages that yield no text (scans, blank separators) are dropped, so
    the returned list can be shorter than the page count.
    """

    def extract(self, stream: BinaryIO) -> list[str]:
        pages = []
        try:
            reader = PdfReader(stream)
            for page in reader.pages:
                text = page.extract_text() or ""
                if text.strip():
                    pages.append(text.strip())
        except Exception:
            logger.exception("PDF extraction failed")
            return [EXTRACTION_FAILED]

        logger.info("Extracted %d page(s) of text from PDF", len(pages))
        return pages


class PlainTextExtractor(BaseExtractor):
    """
    UTF-8 text files. A form feed (\\f) starts a new page, which is how
    pdftotext and most print-to-text tools mark page breaks.
    """

    def __init__(self, encoding: str = "utf-8"):
        self._encoding = encoding

    def extract(self, stream: BinaryIO) -> list[str]:
        try:
            text = stream.read().decode(self._encoding)
        except (OSError, UnicodeDecodeError):
            logger.exception("Text extraction failed")
            return [EXTRACTION_FAILED]

        return [page.strip() for page in text.split("\f") if page.strip()]


# ---------------------------------------------------------------------------
# Factory: pick the extractor from the file name
# ---------------------------------------------------------------------------

def get_extractor(filename: str) -> BaseExtractor:
    """
    Return the extractor for a file, based on its extension.

    Raises:
        ValueError: If the extension is not supported.
    """
    suffix = PurePath(filename).suffix.lower()

    if suffix == ".pdf":
        return PdfExtractor()

    elif suffix in (".txt", ".md"):
        return PlainTextExtractor()

    else:
        raise ValueError(
            f"Unsupported document format: '{suffix or filename}'. "
            f"Supported: '.pdf', '.txt', '.md'."
        )
