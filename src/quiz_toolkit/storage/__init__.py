"""
Storage collaborators: the in-memory repository and local file storage.

Usage:
    from quiz_toolkit.storage import InMemoryRepository, LocalFileStorage
"""

from .files import LocalFileStorage
from .memory import InMemoryRepository

__all__ = [
    "InMemoryRepository",
    "LocalFileStorage",
]
