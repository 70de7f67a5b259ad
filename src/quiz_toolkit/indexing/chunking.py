"""
Text chunking.

Splits extracted page text into bounded chunks for embedding and
question generation. Paragraphs are the natural unit: they are packed
greedily up to max_chunk_size, and only a paragraph that is too big on
its own gets broken into sentences.

    normalize → split on blank lines → pack paragraphs
                                         └ oversized? pack sentences

The output is deterministic for a given text and config. Chunks are
disjoint (no overlap) so every question cites exactly one passage.

Usage:
    from quiz_toolkit.indexing.chunking import ParagraphChunker
    from quiz_toolkit.config import ChunkingConfig

    chunker = ParagraphChunker(ChunkingConfig(max_chunk_size=800))
    chunks = chunker.chunk(page_text)
"""

import re

from quiz_toolkit.base.indexer import BaseChunker
from quiz_toolkit.config import ChunkingConfig

PARAGRAPH_SEPARATOR = "\n\n"
SENTENCE_SEPARATOR = " "

# Sentence fragments this short are dropped when a paragraph is split.
MIN_SENTENCE_LENGTH = 10

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
_HORIZONTAL_SPACE = re.compile(r"[ \t]+")
_SPACE_AROUND_NEWLINE = re.compile(r" *\n *")
_EXTRA_BLANK_LINES = re.compile(r"\n{3,}")
# End punctuation, whitespace, then a capital (accented Latin capitals included)
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+(?=[A-ZÀ-ÖØ-Þ])")


def normalize_text(text: str) -> str:
    """
    Clean extracted text before chunking.

    Drops control characters, unifies line endings, collapses runs of
    spaces/tabs, trims spaces around line breaks and squeezes two or more
    blank lines down to one.
    """
    if not text:
        return ""

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _CONTROL_CHARS.sub("", text)
    text = _HORIZONTAL_SPACE.sub(" ", text)
    text = _SPACE_AROUND_NEWLINE.sub("\n", text)
    text = _EXTRA_BLANK_LINES.sub("\n\n", text)
    return text.strip()


def split_into_sentences(text: str) -> list[str]:
    """Split a paragraph into sentences, dropping fragments of 10 characters or fewer."""
    sentences = (s.strip() for s in _SENTENCE_BOUNDARY.split(text))
    return [s for s in sentences if len(s) > MIN_SENTENCE_LENGTH]


class ParagraphChunker(BaseChunker):
    """
    Greedy paragraph packer with a sentence-level fallback.

    A chunk is never longer than max_chunk_size, except when a single
    sentence is longer than that on its own: such a sentence becomes an
    oversized chunk rather than being cut mid-word.
    """

    def __init__(self, config: ChunkingConfig = None):
        super().__init__(config or ChunkingConfig())

    def chunk(self, text: str) -> list[str]:
        max_size = self.config.max_chunk_size
        text = normalize_text(text)
        if not text:
            return []

        chunks: list[str] = []
        buffer = ""

        for paragraph in text.split(PARAGRAPH_SEPARATOR):
            if not paragraph:
                continue

            if buffer and len(buffer) + len(PARAGRAPH_SEPARATOR) + len(paragraph) <= max_size:
                buffer += PARAGRAPH_SEPARATOR + paragraph
                continue

            if buffer:
                chunks.append(buffer)
                buffer = ""

            if len(paragraph) <= max_size:
                buffer = paragraph
            else:
                # The last, possibly partial, sentence group stays open so the
                # next paragraph can still join it.
                packed = self._pack_sentences(paragraph, max_size)
                chunks.extend(packed[:-1])
                buffer = packed[-1] if packed else ""

        if buffer:
            chunks.append(buffer)

        return chunks

    def _pack_sentences(self, paragraph: str, max_size: int) -> list[str]:
        packed: list[str] = []
        buffer = ""

        for sentence in split_into_sentences(paragraph):
            if buffer and len(buffer) + len(SENTENCE_SEPARATOR) + len(sentence) > max_size:
                packed.append(buffer)
                buffer = sentence
            else:
                buffer = f"{buffer}{SENTENCE_SEPARATOR}{sentence}" if buffer else sentence

        if buffer:
            packed.append(buffer)
        return packed
