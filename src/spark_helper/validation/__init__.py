"""
Validation and error handling for the spark_helper package.

This module provides input validation and error handling with consistent
error reporting across the package.
"""

from .exceptions import (
    ErrorSeverity,
    InvalidParameterError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_file_error,
)

from .validators import (
    validate_boolean,
    validate_enum_choice,
    validate_positive_integer,
    validate_string,
)

__all__ = [
    "ErrorSeverity",
    "InvalidParameterError",
    "ValidationError",
    "handle_error",
    "handle_config_error",
    "handle_file_error",
    "handle_cli_error",
    "validate_boolean",
    "validate_enum_choice",
    "validate_positive_integer",
    "validate_string",
]
