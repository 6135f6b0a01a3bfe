"""Tests for error types and codes."""

import pytest

from gqltags.core.errors import (
    ConfigError,
    ErrorCode,
    GqlTagsError,
    InternalError,
    TagIndexError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.NO_RESOLVABLE_ROOT, 3000),
            (ErrorCode.TAG_FILE_WRITE_FAILED, 3000),
            (ErrorCode.TAG_FILE_READ_FAILED, 3000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000


class TestGqlTagsError:
    """Base error behavior tests."""

    def test_to_dict_serializes_all_fields(self) -> None:
        error = GqlTagsError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        assert error.to_dict() == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_str_includes_code_and_name(self) -> None:
        error = InternalError.unexpected("boom")
        assert str(error) == "[9001] INTERNAL_ERROR: Internal error: boom"

    def test_is_raisable(self) -> None:
        with pytest.raises(GqlTagsError) as exc_info:
            raise ConfigError.file_not_found("/nope.yaml")
        assert exc_info.value.details == {"path": "/nope.yaml"}


class TestTagIndexError:
    """Factory method tests."""

    def test_no_resolvable_root_without_file(self) -> None:
        error = TagIndexError.no_resolvable_root(None)

        assert error.code == ErrorCode.NO_RESOLVABLE_ROOT
        assert "<no file>" in error.message
        assert not error.retryable

    def test_write_failed_is_retryable(self) -> None:
        error = TagIndexError.write_failed("/ro/.TAGS", "Read-only file system")

        assert error.code == ErrorCode.TAG_FILE_WRITE_FAILED
        assert error.retryable
        assert error.details == {"path": "/ro/.TAGS", "reason": "Read-only file system"}

    def test_read_failed_names_path(self) -> None:
        error = TagIndexError.read_failed("/x/.TAGS", "No such file or directory")

        assert error.code == ErrorCode.TAG_FILE_READ_FAILED
        assert "/x/.TAGS" in error.message
