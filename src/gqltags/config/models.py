"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (GQLTAGS__SECTION__KEY)
3. Repo YAML (<vc root>/.gqltags.yaml)
4. Global YAML (~/.config/gqltags/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    GQLTAGS__<SECTION>__<KEY>=<VALUE>

Examples:
    GQLTAGS__LOGGING__LEVEL=DEBUG
    GQLTAGS__TAGS__TAG_FILE_NAME=.tags
    GQLTAGS__TAGS__EXTENSIONS='[".graphqls", ".graphql"]'
    GQLTAGS__REBUILD__MAX_WORKERS=4
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_EXTENSION = ".graphqls"
DEFAULT_TAG_FILE_NAME = ".TAGS"


def _absolute_dir(value: str) -> str:
    path = Path(value).expanduser()
    if not path.is_absolute():
        raise ValueError(f"Search path entries must be absolute directories: {value}")
    return str(path.resolve())


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        GQLTAGS__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every matched declaration.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class TagsConfig(BaseModel):
    """What to scan and where the tag file goes.

    Immutable once loaded; resolver, scanner and builder all receive it
    explicitly.

    Env vars:
        GQLTAGS__TAGS__EXTENSIONS: JSON list of file extensions to scan
        GQLTAGS__TAGS__TAG_FILE_NAME: Base name of the tag file
    """

    model_config = ConfigDict(frozen=True)

    extensions: tuple[str, ...] = Field(
        default=(DEFAULT_EXTENSION,),
        description="File name suffixes treated as schema files.",
    )
    tag_file_name: str = Field(
        default=DEFAULT_TAG_FILE_NAME,
        description="Tag file base name, written at the VC root (or file directory).",
    )
    search_paths: dict[str, tuple[str, ...]] = Field(
        default_factory=dict,
        description="VC root -> ordered schema root directories. "
        "Use when schema files live outside the repository being edited.",
    )
    extra_prune_dirs: tuple[str, ...] = Field(
        default=(),
        description="Additional directory names never descended into.",
    )
    prune_default_dirs: bool = Field(
        default=False,
        description="Also skip dependency and cache directories (node_modules, venv, ...). "
        "Off by default because vendored schemas often live there.",
    )

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("At least one file extension is required")
        normalized: list[str] = []
        for ext in v:
            ext = ext.strip()
            if not ext or ext == ".":
                raise ValueError(f"Invalid file extension: {ext!r}")
            ext = ext if ext.startswith(".") else f".{ext}"
            if ext not in normalized:
                normalized.append(ext)
        return tuple(normalized)

    @field_validator("tag_file_name")
    @classmethod
    def validate_tag_file_name(cls, v: str) -> str:
        if not v or Path(v).name != v or v in (".", ".."):
            raise ValueError(f"Tag file name must be a bare file name: {v!r}")
        return v

    @field_validator("search_paths")
    @classmethod
    def validate_search_paths(cls, v: dict[str, tuple[str, ...]]) -> dict[str, tuple[str, ...]]:
        # Later keys normalizing to the same directory replace earlier ones
        normalized: dict[str, tuple[str, ...]] = {}
        for key, roots in v.items():
            if not roots:
                raise ValueError(f"Search path entry for {key} lists no directories")
            normalized[_absolute_dir(key)] = tuple(_absolute_dir(r) for r in roots)
        return normalized


class RebuildConfig(BaseModel):
    """Background rebuild configuration.

    Env vars:
        GQLTAGS__REBUILD__MAX_WORKERS: Threads available for rebuild work
    """

    max_workers: int = Field(
        default=2,
        description="Threads for rebuilds. One rebuild per tag file runs at a time "
        "regardless; more workers only help when several workspaces rebuild together.",
    )

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_workers must be >= 1, got {v}")
        return v


class GqlTagsConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    tags: TagsConfig = Field(default_factory=TagsConfig)
    rebuild: RebuildConfig = Field(default_factory=RebuildConfig)
