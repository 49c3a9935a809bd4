"""
Configuration file loading utilities.

This module handles the low-level loading and parsing of the TOML
configuration file.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from ..validation import ErrorSeverity, ValidationError, handle_config_error

logger = logging.getLogger(__name__)

CONFIG_SECTIONS = ("monitor", "storage")


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Load and parse a TOML file with error handling.

    Args:
        file_path: Path to the TOML file to load
        description: Human-readable description for error messages

    Returns:
        Parsed TOML data as a dictionary

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the file is malformed
    """
    logger.info(f"Loading {description} from: {file_path}")

    if not file_path.exists():
        logger.error(f"{description} not found: {file_path}")
        raise FileNotFoundError(f"{description} not found: {file_path}")

    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {description}",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def load_main_config(config_path: Path) -> Dict[str, Any]:
    """
    Load the main configuration file (config.toml).

    Only the `[monitor]` and `[storage]` tables are read. Other top-level keys
    are ignored with a warning, typically a misspelled section name.

    Args:
        config_path: Path to the config.toml file

    Returns:
        Parsed configuration data, with both sections present

    Raises:
        ValidationError: If `monitor` or `storage` is not a table
    """
    config_data = load_toml_file(config_path, "main configuration file")

    for key in config_data:
        if key not in CONFIG_SECTIONS:
            logger.warning(
                f"Ignoring unknown entry '{key}' in {config_path}, "
                f"expected sections: {', '.join(CONFIG_SECTIONS)}"
            )

    sections = {}
    for section in CONFIG_SECTIONS:
        table = config_data.get(section, {})
        if not isinstance(table, dict):
            raise ValidationError(
                f"{section} must be a table ([{section}]), got {table!r}",
                field_name=section,
                value=table
            )
        sections[section] = table
    return sections
