"""gqltags error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Index
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Index (3xxx)
    NO_RESOLVABLE_ROOT = 3001
    TAG_FILE_WRITE_FAILED = 3002
    TAG_FILE_READ_FAILED = 3003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class GqlTagsError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'NO_RESOLVABLE_ROOT')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(GqlTagsError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class TagIndexError(GqlTagsError):
    """Errors that abort a single index build, read or write."""

    @classmethod
    def no_resolvable_root(cls, file_path: str | None) -> "TagIndexError":
        return cls(
            code=ErrorCode.NO_RESOLVABLE_ROOT,
            message=f"No search root could be determined for {file_path or '<no file>'}",
            details={"file_path": file_path},
        )

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "TagIndexError":
        return cls(
            code=ErrorCode.TAG_FILE_WRITE_FAILED,
            message=f"Failed to write tag file {path}: {reason}",
            retryable=True,
            details={"path": path, "reason": reason},
        )

    @classmethod
    def read_failed(cls, path: str, reason: str) -> "TagIndexError":
        return cls(
            code=ErrorCode.TAG_FILE_READ_FAILED,
            message=f"Failed to read tag file {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class InternalError(GqlTagsError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
