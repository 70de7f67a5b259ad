"""
Local file storage for uploaded documents.

Files land under StorageConfig.upload_root as "<uuid4>_<original name>",
so two uploads of "handbook.pdf" never overwrite each other.
"""

import logging
import os
import shutil
import uuid
from pathlib import Path
from typing import BinaryIO

from quiz_toolkit.config import StorageConfig

logger = logging.getLogger(__name__)


class LocalFileStorage:
    """Writes, opens and deletes uploaded files on the local filesystem."""

    def __init__(self, config: StorageConfig = None):
        self._config = config or StorageConfig()
        self._root = Path(self._config.upload_root)

    @property
    def root(self) -> Path:
        return self._root

    def save(self, filename: str, stream: BinaryIO) -> str:
        """
        Copy stream into a fresh file and return its path.

        Only the base name of filename is kept, so a client-supplied
        "../../etc/passwd" still ends up inside the upload root.
        """
        safe_name = os.path.basename(filename.replace("\\", "/")) or "upload"
        path = self._root / f"{uuid.uuid4()}_{safe_name}"
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "wb") as out:
            shutil.copyfileobj(stream, out)

        logger.info("Stored upload %s (%d bytes)", path, path.stat().st_size)
        return str(path)

    def open(self, path: str) -> BinaryIO:
        return open(path, "rb")

    def delete(self, path: str) -> bool:
        """Remove a stored file. Returns False if it was already gone."""
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.warning("Stored file %s was already missing", path)
            return False
        return True
