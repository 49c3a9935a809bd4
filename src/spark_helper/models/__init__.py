"""
Data models used throughout the package.
"""

from .config import AppConfig, MonitorConfig, StorageConfig

__all__ = [
    "AppConfig",
    "MonitorConfig",
    "StorageConfig",
]
