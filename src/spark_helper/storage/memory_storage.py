"""
In-memory storage implementation.

Files live in a dictionary keyed by normalized path. A folder exists as long
as at least one file lives under it, the way object stores behave.
"""

import logging
import posixpath
from typing import Dict, List

from .base import Compression, FileStorage

logger = logging.getLogger(__name__)


def _normalize(path: str) -> str:
    normalized = posixpath.normpath(path)
    # the current folder is the empty dirname of relative paths
    return "" if normalized == "." else normalized


class MemoryStorage(FileStorage):
    """Dictionary-backed storage, for tests and dry runs."""

    def __init__(self, compression: Compression = "snappy"):
        super().__init__(compression)
        self.files: Dict[str, bytes] = {}

    def read_bytes(self, path: str) -> bytes:
        try:
            return self.files[_normalize(path)]
        except KeyError:
            raise FileNotFoundError(f"No such file: {path}")

    def write_bytes(self, data: bytes, path: str) -> None:
        self.files[_normalize(path)] = bytes(data)
        logger.debug(f"Wrote {len(data)} bytes to memory://{path}")

    def list_file_names(self, folder: str) -> List[str]:
        folder = _normalize(folder)
        return sorted(
            posixpath.basename(path)
            for path in self.files
            if posixpath.dirname(path) == folder
        )

    def delete_file(self, path: str) -> bool:
        return self.files.pop(_normalize(path), None) is not None

    def file_exists(self, path: str) -> bool:
        return _normalize(path) in self.files

    def folder_exists(self, path: str) -> bool:
        folder = _normalize(path)
        if not folder:
            return any(not file_path.startswith("/") for file_path in self.files)
        prefix = folder.rstrip("/") + "/"
        return any(file_path.startswith(prefix) for file_path in self.files)
