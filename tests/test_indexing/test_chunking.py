"""Tests for chunking: pure text processing, no API calls."""

import pytest

from quiz_toolkit.config import ChunkingConfig
from quiz_toolkit.indexing.chunking import (
    PARAGRAPH_SEPARATOR,
    ParagraphChunker,
    normalize_text,
    split_into_sentences,
)

SHORT_PAGE = (
    "The club was chartered in 1952 by twenty founding members.\n\n"
    "Meetings are held weekly and every member is expected to attend.\n\n"
    "Service projects are chosen by the board each spring."
)


class TestNormalizeText:

    def test_collapses_spaces_and_tabs(self):
        assert normalize_text("a  \t b") == "a b"

    def test_unifies_line_endings(self):
        assert normalize_text("one\r\ntwo\rthree") == "one\ntwo\nthree"

    def test_drops_control_characters(self):
        assert normalize_text("clean\x00 \x07text\x7f") == "clean text"

    def test_trims_around_line_breaks(self):
        assert normalize_text("line one   \n   line two") == "line one\nline two"

    def test_squeezes_blank_lines(self):
        assert normalize_text("a\n\n\n\n\nb") == "a\n\nb"

    def test_empty(self):
        assert normalize_text("") == ""
        assert normalize_text("   \n\n  ") == ""


class TestSplitIntoSentences:

    def test_splits_on_capitalized_boundaries(self):
        text = "The board meets monthly. Minutes are shared by email! Is that clear? Yes it is."
        assert split_into_sentences(text) == [
            "The board meets monthly.",
            "Minutes are shared by email!",
            "Is that clear?",
            "Yes it is.",
        ]

    def test_accented_capital_starts_a_sentence(self):
        text = "The meeting closed early. Élections are held in June."
        assert split_into_sentences(text)[1] == "Élections are held in June."

    def test_lowercase_does_not_split(self):
        text = "Dues are about 120 e.g. per year for members."
        assert split_into_sentences(text) == [text]

    def test_short_fragments_dropped(self):
        assert split_into_sentences("Fine. Ok. This sentence is long enough.") == [
            "This sentence is long enough.",
        ]


class TestParagraphChunker:

    def test_short_page_is_one_chunk(self):
        chunks = ParagraphChunker(ChunkingConfig(max_chunk_size=800)).chunk(SHORT_PAGE)
        assert chunks == [normalize_text(SHORT_PAGE)]

    def test_paragraphs_packed_greedily(self):
        chunks = ParagraphChunker(ChunkingConfig(max_chunk_size=130)).chunk(SHORT_PAGE)
        paragraphs = SHORT_PAGE.split("\n\n")
        assert chunks == [paragraphs[0] + "\n\n" + paragraphs[1], paragraphs[2]]

    def test_deterministic(self, chunking_config):
        chunker = ParagraphChunker(chunking_config)
        text = SHORT_PAGE * 5
        assert chunker.chunk(text) == chunker.chunk(text)

    @pytest.mark.parametrize("max_size", [50, 120, 300])
    def test_chunks_respect_bound(self, max_size):
        sentence = "Members volunteer at the food bank on Saturdays. "
        text = "\n\n".join([sentence * 3, sentence * 12, sentence])
        chunks = ParagraphChunker(ChunkingConfig(max_chunk_size=max_size)).chunk(text)

        assert chunks
        for chunk in chunks:
            assert len(chunk) <= max_size

    def test_oversized_sentence_kept_whole(self):
        sentence = "A" + "a" * 120 + "."
        chunks = ParagraphChunker(ChunkingConfig(max_chunk_size=50)).chunk(sentence)
        assert chunks == [sentence]

    def test_oversized_paragraph_split_into_sentences(self):
        paragraph = " ".join(f"Sentence number {i} describes a club rule." for i in range(10))
        chunks = ParagraphChunker(ChunkingConfig(max_chunk_size=100)).chunk(paragraph)

        assert len(chunks) > 1
        assert all(len(c) <= 100 for c in chunks)
        assert " ".join(chunks) == paragraph

    def test_reconstruction_from_paragraph_chunks(self):
        """Paragraph-level chunks joined by the separator give back the normalized text."""
        text = "First  paragraph here.\r\n\r\n\r\nSecond paragraph\tthere.\n\nThird one."
        chunker = ParagraphChunker(ChunkingConfig(max_chunk_size=50))
        chunks = chunker.chunk(text)
        assert len(chunks) > 1
        assert PARAGRAPH_SEPARATOR.join(chunks) == normalize_text(text)

    def test_empty_text(self):
        assert ParagraphChunker().chunk("") == []
        assert ParagraphChunker().chunk("\n\n  \n") == []
