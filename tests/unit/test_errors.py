"""
Tests for jarvis.core.errors

AppError renders "<message>: <cause>" with a cause and "<message>" without,
and each constructor tags the matching HTTP status.
"""

import pytest
from fastapi import status

from jarvis.core.errors import (
    AppError,
    ErrorResponse,
    bad_request_error,
    internal_server_error,
    new_app_error,
    not_found_error,
    unauthorized_error,
)
from jarvis.core.exceptions import JarvisError


class TestAppErrorMessage:
    """str(AppError) formatting."""

    def test_with_underlying_error(self) -> None:
        err = AppError(status.HTTP_400_BAD_REQUEST, "Invalid input", ValueError("field is required"))
        assert str(err) == "Invalid input: field is required"

    def test_without_underlying_error(self) -> None:
        err = AppError(status.HTTP_404_NOT_FOUND, "Resource not found")
        assert str(err) == "Resource not found"


class TestNewAppError:
    """new_app_error() keeps every input."""

    def test_fields_preserved(self) -> None:
        cause = RuntimeError("underlying error")

        app_err = new_app_error(500, "Something went wrong", cause)

        assert app_err.code == 500
        assert app_err.message == "Something went wrong"
        assert app_err.err is cause

    def test_cause_is_chained(self) -> None:
        cause = RuntimeError("underlying error")
        assert new_app_error(500, "boom", cause).__cause__ is cause

    def test_fields_are_read_only(self) -> None:
        app_err = new_app_error(500, "boom")
        with pytest.raises(AttributeError):
            app_err.code = 400  # type: ignore[misc]

    def test_is_jarvis_error(self) -> None:
        assert isinstance(new_app_error(500, "boom"), JarvisError)

    def test_can_be_raised_and_caught(self) -> None:
        with pytest.raises(AppError, match="^missing: gone$"):
            raise not_found_error("missing", LookupError("gone"))


class TestErrorConstructors:
    """Each constructor tags the corresponding HTTP status."""

    @pytest.mark.parametrize(
        ("constructor", "expected_code"),
        [
            (bad_request_error, 400),
            (unauthorized_error, 401),
            (not_found_error, 404),
            (internal_server_error, 500),
        ],
    )
    def test_code_message_and_cause(self, constructor, expected_code: int) -> None:
        cause = Exception("test error")

        app_err = constructor("test message", cause)

        assert app_err.code == expected_code
        assert app_err.message == "test message"
        assert app_err.err is cause

    def test_cause_is_optional(self) -> None:
        app_err = bad_request_error("no cause")
        assert app_err.err is None
        assert str(app_err) == "no cause"


class TestErrorResponse:
    """Serializable view never includes the cause."""

    def test_response_fields(self) -> None:
        response = unauthorized_error("bad token", ValueError("secret detail")).to_response()

        assert isinstance(response, ErrorResponse)
        assert response.model_dump() == {"code": 401, "message": "bad token"}
