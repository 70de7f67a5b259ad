"""
Retrieval: semantic search over stored chunks.

Usage:
    from quiz_toolkit.retrieval import SemanticRetriever, rank_chunks
"""

from .search import SemanticRetriever, rank_chunks

__all__ = [
    "SemanticRetriever",
    "rank_chunks",
]
