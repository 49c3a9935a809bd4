"""
Local filesystem storage implementation.
"""

import logging
from pathlib import Path
from typing import List

from ..validation import handle_file_error
from .base import Compression, FileStorage

logger = logging.getLogger(__name__)


class LocalFileStorage(FileStorage):
    """
    Storage backed by the local filesystem.

    Used when a job runs in local mode, or when its log folder lives on a
    mounted volume rather than in HDFS.
    """

    def __init__(self, compression: Compression = "snappy"):
        super().__init__(compression)
        logger.debug(f"Initialized LocalFileStorage with compression: {compression}")

    def read_bytes(self, path: str) -> bytes:
        try:
            return Path(path).read_bytes()
        except Exception as e:
            handle_file_error(e, f"reading {path}", logger=logger)
            raise

    def write_bytes(self, data: bytes, path: str) -> None:
        try:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            Path(path).write_bytes(data)
            logger.debug(f"Wrote {len(data)} bytes to {path}")
        except Exception as e:
            handle_file_error(e, f"writing {path}", logger=logger)
            raise

    def list_file_names(self, folder: str) -> List[str]:
        return sorted(child.name for child in Path(folder).iterdir() if child.is_file())

    def delete_file(self, path: str) -> bool:
        file_path = Path(path)
        if not file_path.is_file():
            return False
        try:
            file_path.unlink()
        except Exception as e:
            handle_file_error(e, f"deleting {path}", logger=logger)
            raise
        logger.debug(f"Deleted {path}")
        return True

    def file_exists(self, path: str) -> bool:
        return Path(path).is_file()

    def folder_exists(self, path: str) -> bool:
        return Path(path).is_dir()
