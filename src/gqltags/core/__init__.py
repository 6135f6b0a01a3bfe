"""Core module exports."""

from gqltags.core.errors import (
    ConfigError,
    ErrorCode,
    GqlTagsError,
    InternalError,
    TagIndexError,
)
from gqltags.core.logging import configure_logging, get_log_file_path, get_logger

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "GqlTagsError",
    "InternalError",
    "TagIndexError",
    # Logging
    "configure_logging",
    "get_log_file_path",
    "get_logger",
]
