"""
Configuration data models.

This module contains the configuration data structures loaded from
`config.toml`: report settings for the monitor and the storage backend the
reports are persisted with.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Literal


@dataclass
class StorageConfig:
    """
    Configuration model for report storage, loaded from the `[storage]` table.

    Attributes:
        backend: Where log folders live
            - 'local': local filesystem (local mode, mounted volumes)
            - 'hdfs': Hadoop FileSystem of the job's SparkContext
            - 'memory': in-memory, nothing persisted (dry runs)
        compression: Compression algorithm of the Parquet KPI history
        kpi_history: Whether KPI results are appended to
            `<log_folder>/kpi_history.parquet` on every save
    """

    backend: Literal["local", "hdfs", "memory"] = "local"
    compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd"] = "snappy"
    kpi_history: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "backend": self.backend,
            "compression": self.compression,
            "kpi_history": self.kpi_history,
        }


@dataclass
class MonitorConfig:
    """
    Configuration of the monitoring report, loaded from the `[monitor]` table.
    """

    # First line of the report, centred with tabs. Empty means no title.
    report_title: str = ""
    # The persons in charge of the job.
    point_of_contact: str = ""
    # Free text written at the beginning of the report.
    additional_info: str = ""
    # Folder where reports are archived.
    log_folder: str = "logs"
    # Whether reports older than `purge_window` days are purged on save.
    purge_logs: bool = False
    # Age in days after which a report is purged.
    purge_window: int = 7


@dataclass
class AppConfig:
    """Top-level application configuration."""

    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
