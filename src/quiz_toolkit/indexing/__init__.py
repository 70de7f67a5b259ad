"""
Indexing pipeline: extract → chunk → embed → store.

Usage:
    from quiz_toolkit.indexing import DocumentIngestor, ParagraphChunker, EmbeddingGenerator
"""

from .chunking import ParagraphChunker, normalize_text, split_into_sentences
from .embeddings import EmbeddingGenerator, fallback_embedding, get_embedding_model
from .extraction import (
    EXTRACTION_FAILED,
    PdfExtractor,
    PlainTextExtractor,
    get_extractor,
    is_extraction_failure,
)
from .ingestion import DocumentIngestor

__all__ = [
    # Extraction
    "EXTRACTION_FAILED",
    "PdfExtractor",
    "PlainTextExtractor",
    "get_extractor",
    "is_extraction_failure",
    # Chunking
    "ParagraphChunker",
    "normalize_text",
    "split_into_sentences",
    # Embeddings
    "EmbeddingGenerator",
    "fallback_embedding",
    "get_embedding_model",
    # Pipeline
    "DocumentIngestor",
]
