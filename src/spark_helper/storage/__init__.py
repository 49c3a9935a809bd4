"""
Storage module for monitoring reports.

This module provides the storage-access interface the monitoring facility is
written against, with interchangeable backends:
- Local filesystem, for local-mode jobs and mounted volumes
- HDFS, through the Hadoop FileSystem of a live SparkContext
- In-memory, for tests and dry runs

Every backend stores plain-text reports as well as Parquet KPI history,
the latter handled with Polars.
"""

from .base import FileStorage
from .factory import create_storage
from .hdfs_storage import SparkHdfsStorage
from .local_storage import LocalFileStorage
from .memory_storage import MemoryStorage

__all__ = [
    "FileStorage",
    "LocalFileStorage",
    "MemoryStorage",
    "SparkHdfsStorage",
    "create_storage",
]
