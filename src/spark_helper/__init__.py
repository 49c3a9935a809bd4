"""
spark_helper: job monitoring helpers for Spark/Hadoop pipelines.

The package is organized into specialized modules:
- monitoring: Report accumulation, KPI validation and report retention
- storage: Storage backends for log folders (local, HDFS, in-memory)
- config: Configuration loading and validation
- models: Configuration data structures
- validation: Input validation and error handling
- cli: Command-line interface for log folders

Usage:
    From a Spark driver:
        from spark_helper import Monitor, KpiTest, create_storage
        monitor = Monitor("My Job", storage=create_storage("hdfs", sc))
        monitor.update_report_with_success("Loading")
        monitor.save_report("/my/hdfs/logs")

    From command line:
        spark-helper-report status /my/logs
"""

from .config import get_config, clear_config_cache, set_config_path
from .cli import main_cli

from .models import AppConfig, MonitorConfig, StorageConfig

from .monitoring import (
    Comparator,
    KpiResult,
    KpiTest,
    Monitor,
    Unit,
    build_kpi_test,
    purge_outdated_logs,
)

from .storage import (
    FileStorage,
    LocalFileStorage,
    MemoryStorage,
    SparkHdfsStorage,
    create_storage,
)

from .validation import InvalidParameterError, ValidationError

__version__ = "1.0.0"

__all__ = [
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "main_cli",
    "AppConfig",
    "MonitorConfig",
    "StorageConfig",
    "Monitor",
    "KpiTest",
    "KpiResult",
    "Comparator",
    "Unit",
    "build_kpi_test",
    "purge_outdated_logs",
    "FileStorage",
    "LocalFileStorage",
    "MemoryStorage",
    "SparkHdfsStorage",
    "create_storage",
    "InvalidParameterError",
    "ValidationError",
]
