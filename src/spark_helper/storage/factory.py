"""
Factory for creating storage instances.
"""

import logging
from typing import Any, Literal, Optional

from .base import Compression, FileStorage
from .hdfs_storage import SparkHdfsStorage
from .local_storage import LocalFileStorage
from .memory_storage import MemoryStorage

logger = logging.getLogger(__name__)


def create_storage(
    backend: Literal["local", "hdfs", "memory"] = "local",
    spark_context: Optional[Any] = None,
    compression: Compression = "snappy",
) -> FileStorage:
    """
    Create a storage instance for the specified backend.

    Args:
        backend: Storage backend ('local', 'hdfs' or 'memory')
        spark_context: Live SparkContext, required by the 'hdfs' backend
        compression: Compression algorithm for Parquet files

    Returns:
        FileStorage instance

    Raises:
        ValueError: If an unsupported backend is specified, or if the 'hdfs'
            backend is requested without a SparkContext
    """
    if backend == "local":
        logger.debug(f"Creating LocalFileStorage with compression: {compression}")
        return LocalFileStorage(compression=compression)
    elif backend == "hdfs":
        if spark_context is None:
            raise ValueError("The 'hdfs' storage backend requires a SparkContext")
        logger.debug(f"Creating SparkHdfsStorage with compression: {compression}")
        return SparkHdfsStorage(spark_context, compression=compression)
    elif backend == "memory":
        logger.debug("Creating MemoryStorage")
        return MemoryStorage(compression=compression)
    else:
        raise ValueError(f"Unsupported storage backend: {backend}")
