"""
Abstract base classes for text extraction and chunking.

Why separate BaseExtractor and BaseChunker?
    Extraction depends on the file format (PDF today, maybe DOCX later);
    chunking only ever sees plain text. Keeping them apart means a new
    format only needs a new extractor:
        pages = PdfExtractor().extract(stream)
        chunks = ParagraphChunker(config).chunk(pages[0])
"""

from abc import ABC, abstractmethod
from typing import BinaryIO

from quiz_toolkit.config import ChunkingConfig


class BaseExtractor(ABC):
    """
    Contract for binary-to-text extractors.

    An extractor turns a readable byte stream into one text string per
    page, in page order. It never raises: an unreadable document comes
    back as a single sentinel page (see indexing/extraction.py).
    """

    @abstractmethod
    def extract(self, stream: BinaryIO) -> list[str]:
        """
        Extract page texts from a document.

        Args:
            stream: Readable binary stream positioned at the start of the file.

        Returns:
            Non-empty page texts in order, or [EXTRACTION_FAILED].
        """
        ...


class BaseChunker(ABC):
    """
    Contract for text chunkers.

    A chunker takes raw page text and splits it into bounded pieces
    suitable for embedding. Every chunker receives a ChunkingConfig so
    the caller controls the size limit.
    """

    def __init__(self, config: ChunkingConfig):
        self.config = config

    @abstractmethod
    def chunk(self, text: str) -> list[str]:
        """
        Split text into chunks.

        Must be deterministic: the same text and config always give the
        same chunks.
        """
        ...
