"""Tests for text extraction: pypdf and plain text, local files only."""

import io

import pytest
from pypdf import PdfWriter

from quiz_toolkit.indexing.extraction import (
    EXTRACTION_FAILED,
    PdfExtractor,
    PlainTextExtractor,
    get_extractor,
    is_extraction_failure,
)


def _blank_pdf(pages: int = 1) -> io.BytesIO:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    buffer.seek(0)
    return buffer


class TestPdfExtractor:

    def test_garbage_returns_sentinel(self):
        pages = PdfExtractor().extract(io.BytesIO(b"this is not a pdf"))
        assert pages == [EXTRACTION_FAILED]
        assert is_extraction_failure(pages)

    def test_blank_pages_dropped(self):
        assert PdfExtractor().extract(_blank_pdf(pages=3)) == []


class TestPlainTextExtractor:

    def test_form_feed_separates_pages(self):
        stream = io.BytesIO("Page one text.\fPage two text.\n".encode("utf-8"))
        assert PlainTextExtractor().extract(stream) == ["Page one text.", "Page two text."]

    def test_blank_pages_dropped(self):
        stream = io.BytesIO(b"Only page.\f  \n\f")
        assert PlainTextExtractor().extract(stream) == ["Only page."]

    def test_undecodable_returns_sentinel(self):
        assert PlainTextExtractor().extract(io.BytesIO(b"\xff\xfe\xfa")) == [EXTRACTION_FAILED]


class TestGetExtractor:

    def test_by_extension(self):
        assert isinstance(get_extractor("handbook.PDF"), PdfExtractor)
        assert isinstance(get_extractor("notes.txt"), PlainTextExtractor)
        assert isinstance(get_extractor("uploads/abc_guide.md"), PlainTextExtractor)

    def test_unsupported(self):
        with pytest.raises(ValueError, match="Unsupported"):
            get_extractor("slides.pptx")

    def test_real_pages_are_not_a_failure(self):
        assert not is_extraction_failure(["Some text"])
        assert not is_extraction_failure([])
