"""
Command-line interface for the spark_helper package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
