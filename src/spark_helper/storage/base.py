"""
Abstract base class for report storage implementations.

This module defines the FileStorage abstract base class, the interface every
storage backend (local filesystem, HDFS, in-memory) implements. The monitoring
facility only talks to storage through this interface, so reports and their
retention can be exercised without a real distributed filesystem.

Backends implement the raw byte-level operations:
- Reading and writing whole files
- Listing the file names of a folder
- Deleting files and checking file/folder existence

Text and DataFrame helpers are built on top of those primitives, which keeps
every backend able to hold both plain-text reports and Parquet KPI history.
"""

import io
import logging
from abc import ABC, abstractmethod
from typing import List, Literal

import polars as pl

logger = logging.getLogger(__name__)

Compression = Literal["snappy", "gzip", "brotli", "lz4", "zstd"]


class FileStorage(ABC):
    """Abstract base class for storage implementations."""

    def __init__(self, compression: Compression = "snappy"):
        """
        Initialize the storage.

        Args:
            compression: Compression algorithm used for Parquet files
        """
        self.compression = compression

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        """
        Read the whole content of a file.

        Args:
            path: File path to read

        Returns:
            File content

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        pass

    @abstractmethod
    def write_bytes(self, data: bytes, path: str) -> None:
        """
        Write a file, replacing any previous content.

        Parent folders are created when missing.

        Args:
            data: Content to write
            path: File path to write to
        """
        pass

    @abstractmethod
    def list_file_names(self, folder: str) -> List[str]:
        """
        List the names (not paths) of the files directly inside a folder.

        Sub-folders are not listed.

        Args:
            folder: Folder to list

        Returns:
            Sorted list of file names
        """
        pass

    @abstractmethod
    def delete_file(self, path: str) -> bool:
        """
        Delete a file if it exists.

        Args:
            path: File path to delete

        Returns:
            True if a file was deleted, False if there was nothing to delete
        """
        pass

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        """
        Check if a file exists at the specified path.

        Args:
            path: File path to check

        Returns:
            True if file exists, False otherwise
        """
        pass

    @abstractmethod
    def folder_exists(self, path: str) -> bool:
        """
        Check if a folder exists at the specified path.

        Args:
            path: Folder path to check

        Returns:
            True if folder exists, False otherwise
        """
        pass

    def read_text(self, path: str) -> str:
        """Read a UTF-8 text file."""
        return self.read_bytes(path).decode("utf-8")

    def write_text(self, content: str, path: str) -> None:
        """Write a UTF-8 text file, replacing any previous content."""
        self.write_bytes(content.encode("utf-8"), path)

    def load_dataframe(self, path: str) -> pl.DataFrame:
        """
        Load a Polars DataFrame from a Parquet file.

        Args:
            path: File path to load from

        Returns:
            Loaded Polars DataFrame
        """
        return pl.read_parquet(io.BytesIO(self.read_bytes(path)))

    def save_dataframe(self, df: pl.DataFrame, path: str) -> None:
        """
        Save a Polars DataFrame as a Parquet file.

        Args:
            df: Polars DataFrame to save
            path: File path to save to
        """
        buffer = io.BytesIO()
        df.write_parquet(buffer, compression=self.compression)
        self.write_bytes(buffer.getvalue(), path)
        logger.debug(f"Saved DataFrame with {len(df)} rows to {path}")

    def append_dataframe(self, df: pl.DataFrame, path: str) -> None:
        """
        Append a Polars DataFrame to an existing Parquet file.

        Args:
            df: Polars DataFrame to append
            path: File path to append to
        """
        if self.file_exists(path):
            existing_df = self.load_dataframe(path)
            self.save_dataframe(pl.concat([existing_df, df]), path)
            logger.debug(f"Appended {len(df)} rows to existing file {path}")
        else:
            self.save_dataframe(df, path)
            logger.debug(f"Created new file {path} with {len(df)} rows")
