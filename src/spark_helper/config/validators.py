"""
Configuration validation utilities.

This module turns the raw `[monitor]` and `[storage]` tables into validated
configuration dataclasses.
"""

import logging
from typing import Any, Dict

from ..models.config import AppConfig, MonitorConfig, StorageConfig
from ..validation import (
    validate_boolean,
    validate_enum_choice,
    validate_positive_integer,
    validate_string,
)

logger = logging.getLogger(__name__)


def validate_monitor_config(monitor_data: Dict[str, Any]) -> MonitorConfig:
    """
    Validate and create a MonitorConfig from raw configuration data.

    Args:
        monitor_data: Raw `[monitor]` table from TOML

    Returns:
        Validated MonitorConfig instance

    Raises:
        ValidationError: If validation fails
    """
    defaults = MonitorConfig()

    report_title = validate_string(
        monitor_data.get("report_title", defaults.report_title),
        field_name="monitor.report_title",
    )
    point_of_contact = validate_string(
        monitor_data.get("point_of_contact", defaults.point_of_contact),
        field_name="monitor.point_of_contact",
    )
    additional_info = validate_string(
        monitor_data.get("additional_info", defaults.additional_info),
        field_name="monitor.additional_info",
    )
    log_folder = validate_string(
        monitor_data.get("log_folder", defaults.log_folder),
        field_name="monitor.log_folder",
        allow_empty=False,
    )
    purge_logs = validate_boolean(
        monitor_data.get("purge_logs", defaults.purge_logs),
        field_name="monitor.purge_logs",
    )
    purge_window = validate_positive_integer(
        monitor_data.get("purge_window", defaults.purge_window),
        min_value=0,
        field_name="monitor.purge_window",
    )

    return MonitorConfig(
        report_title=report_title,
        point_of_contact=point_of_contact,
        additional_info=additional_info,
        log_folder=log_folder,
        purge_logs=purge_logs,
        purge_window=purge_window,
    )


def validate_storage_config(storage_data: Dict[str, Any]) -> StorageConfig:
    """
    Validate and create a StorageConfig from raw configuration data.

    Args:
        storage_data: Raw `[storage]` table from TOML

    Returns:
        Validated StorageConfig instance

    Raises:
        ValidationError: If validation fails
    """
    backend = validate_enum_choice(
        storage_data.get("backend", "local"),
        choices=["local", "hdfs", "memory"],
        field_name="storage.backend",
    )
    compression = validate_enum_choice(
        storage_data.get("compression", "snappy"),
        choices=["snappy", "gzip", "brotli", "lz4", "zstd"],
        field_name="storage.compression",
    )
    kpi_history = validate_boolean(
        storage_data.get("kpi_history", False),
        field_name="storage.kpi_history",
    )

    return StorageConfig(backend=backend, compression=compression, kpi_history=kpi_history)


def validate_app_config(config_data: Dict[str, Any]) -> AppConfig:
    """Validate the whole parsed config.toml."""
    app_config = AppConfig(
        monitor=validate_monitor_config(config_data.get("monitor", {})),
        storage=validate_storage_config(config_data.get("storage", {})),
    )
    logger.debug(f"Validated configuration: storage={app_config.storage.to_dict()}")
    return app_config
