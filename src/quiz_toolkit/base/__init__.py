"""
Abstract base classes defining the contract for each pipeline stage.

Import from here:
    from quiz_toolkit.base import BaseChunker, BaseQuestionStrategy, BaseRepository
"""

from .indexer import BaseExtractor, BaseChunker
from .generator import BaseQuestionStrategy, GenerationContext
from .repository import BaseRepository

__all__ = [
    "BaseExtractor",
    "BaseChunker",
    "BaseQuestionStrategy",
    "GenerationContext",
    "BaseRepository",
]
