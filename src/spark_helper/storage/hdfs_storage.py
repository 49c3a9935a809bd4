"""
HDFS storage implementation going through a live SparkContext.

The Hadoop ``FileSystem`` is reached via the py4j gateway of the SparkContext
(``sc._jvm``), so the storage uses exactly the Hadoop configuration of the job
(default filesystem, Kerberos credentials, ...) without any extra client
library. The SparkContext is only ever used from the driver.
"""

import logging
from typing import Any, List

from ..validation import handle_file_error
from .base import Compression, FileStorage

logger = logging.getLogger(__name__)


class SparkHdfsStorage(FileStorage):
    """
    Storage backed by the Hadoop FileSystem of a SparkContext.

    Args:
        spark_context: A live ``pyspark.SparkContext``
        compression: Compression algorithm used for Parquet files
    """

    def __init__(self, spark_context: Any, compression: Compression = "snappy"):
        super().__init__(compression)
        self._jvm = spark_context._jvm
        hadoop_conf = spark_context._jsc.hadoopConfiguration()
        self._fs = self._jvm.org.apache.hadoop.fs.FileSystem.get(hadoop_conf)
        logger.debug("Initialized SparkHdfsStorage on the job's default Hadoop FileSystem")

    def _path(self, path: str) -> Any:
        return self._jvm.org.apache.hadoop.fs.Path(path)

    def read_bytes(self, path: str) -> bytes:
        hadoop_path = self._path(path)
        if not self._fs.exists(hadoop_path):
            raise FileNotFoundError(f"No such file in HDFS: {path}")
        stream = self._fs.open(hadoop_path)
        try:
            return bytes(self._jvm.org.apache.commons.io.IOUtils.toByteArray(stream))
        except Exception as e:
            handle_file_error(e, f"reading HDFS file {path}", logger=logger)
            raise
        finally:
            stream.close()

    def write_bytes(self, data: bytes, path: str) -> None:
        # FileSystem.create makes missing parent folders and overwrites
        output = self._fs.create(self._path(path), True)
        try:
            output.write(bytearray(data))
            logger.debug(f"Wrote {len(data)} bytes to HDFS file {path}")
        except Exception as e:
            handle_file_error(e, f"writing HDFS file {path}", logger=logger)
            raise
        finally:
            output.close()

    def list_file_names(self, folder: str) -> List[str]:
        statuses = self._fs.listStatus(self._path(folder))
        return sorted(status.getPath().getName() for status in statuses if status.isFile())

    def delete_file(self, path: str) -> bool:
        if not self.file_exists(path):
            return False
        deleted = bool(self._fs.delete(self._path(path), False))
        logger.debug(f"Deleted HDFS file {path}: {deleted}")
        return deleted

    def file_exists(self, path: str) -> bool:
        hadoop_path = self._path(path)
        return bool(self._fs.exists(hadoop_path)) and bool(
            self._fs.getFileStatus(hadoop_path).isFile()
        )

    def folder_exists(self, path: str) -> bool:
        hadoop_path = self._path(path)
        return bool(self._fs.exists(hadoop_path)) and bool(
            self._fs.getFileStatus(hadoop_path).isDirectory()
        )
