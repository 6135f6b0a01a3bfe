"""Config module exports."""

from gqltags.config.loader import load_config
from gqltags.config.models import (
    GqlTagsConfig,
    LoggingConfig,
    RebuildConfig,
    TagsConfig,
)

__all__ = [
    "load_config",
    "GqlTagsConfig",
    "LoggingConfig",
    "RebuildConfig",
    "TagsConfig",
]
