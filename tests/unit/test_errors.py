"""Unit tests for response error normalization."""

import httpx
import pytest
import pytest_check as check

from hexy.client.errors import (
    ApiConnectionError,
    ApiError,
    AuthenticationError,
    InvalidDataError,
    NotFoundError,
    PermissionDeniedError,
    ServerError,
    api_error_from_response,
    detail_message,
    error_class,
    error_message,
    raise_for_api_error,
)


class TestErrorMessage:
    """Tests for error_message on failed responses."""

    def test_string_detail_is_used_verbatim(self) -> None:
        """A string detail becomes the message unchanged."""
        response = httpx.Response(401, json={"detail": "Invalid credentials"})

        assert error_message(response) == "Invalid credentials"

    def test_validation_detail_uses_field_name(self) -> None:
        """Validation entries render as 'field: msg'."""
        response = httpx.Response(
            422,
            json={"detail": [{"loc": ["body", "username"], "msg": "too short"}]},
        )

        assert error_message(response) == "username: too short"

    def test_validation_entries_are_joined(self) -> None:
        """Multiple validation entries are joined with a comma."""
        body = {
            "detail": [
                {"loc": ["body", "username"], "msg": "too short"},
                {"loc": ["body", "email"], "msg": "not an email"},
            ]
        }

        assert detail_message(body) == "username: too short, email: not an email"

    def test_validation_entry_without_field_uses_placeholder(self) -> None:
        """Missing or one-element loc falls back to 'Field'."""
        body = {"detail": [{"loc": ["body"], "msg": "bad body"}, {"msg": "bad"}]}

        assert detail_message(body) == "Field: bad body, Field: bad"

    def test_unparsable_server_error(self) -> None:
        """A non-JSON 500 maps to the fixed server error message."""
        response = httpx.Response(500, text="<html>Internal Server Error</html>")

        assert error_message(response) == "Server error occurred"

    def test_unparsable_unmapped_status(self) -> None:
        """A non-JSON status without a fixed message reports the status."""
        response = httpx.Response(418, text="teapot")

        assert error_message(response) == "Request failed with status: 418"

    @pytest.mark.parametrize(
        ("status_code", "expected"),
        [
            (401, "Authentication failed"),
            (403, "Access denied"),
            (404, "Resource not found"),
            (422, "Invalid data provided"),
            (502, "Server error occurred"),
        ],
    )
    def test_empty_body_status_messages(self, status_code: int, expected: str) -> None:
        """Empty bodies fall back to the message for their status."""
        assert error_message(httpx.Response(status_code)) == expected

    def test_json_without_detail_is_generic(self) -> None:
        """JSON that carries no usable detail gives the generic message."""
        check.equal(error_message(httpx.Response(400, json={"error": "x"})), "An error occurred")
        check.equal(error_message(httpx.Response(400, json={"detail": {"a": 1}})), "An error occurred")
        check.equal(error_message(httpx.Response(400, json=["x"])), "An error occurred")

    @pytest.mark.parametrize("content", [b"null", b"42", b'"nope"'])
    def test_scalar_json_body_uses_status_message(self, content: bytes) -> None:
        """A body such as ``null`` carries no detail object at all."""
        response = httpx.Response(
            404, content=content, headers={"content-type": "application/json"}
        )

        assert error_message(response) == "Resource not found"


class TestErrorClasses:
    """Tests for status based error classification."""

    @pytest.mark.parametrize(
        ("status_code", "expected"),
        [
            (401, AuthenticationError),
            (403, PermissionDeniedError),
            (404, NotFoundError),
            (422, InvalidDataError),
            (500, ServerError),
            (503, ServerError),
            (400, ApiError),
            (None, ApiConnectionError),
        ],
    )
    def test_error_class_by_status(self, status_code: int | None, expected: type) -> None:
        """Each status maps to its error type."""
        assert error_class(status_code) is expected

    def test_error_carries_message_and_status(self) -> None:
        """The built error keeps the normalized message and status."""
        error = api_error_from_response(
            httpx.Response(401, json={"detail": "Token expired"})
        )

        check.is_instance(error, AuthenticationError)
        check.equal(str(error), "Token expired")
        check.equal(error.message, "Token expired")
        check.equal(error.status_code, 401)

    def test_auth_error_detected_without_message_text(self) -> None:
        """Session expiry is recognizable even when the text differs."""
        error = api_error_from_response(
            httpx.Response(401, json={"detail": "Sesión caducada"})
        )

        assert isinstance(error, AuthenticationError)

    def test_raise_for_api_error_passes_success(self) -> None:
        """Successful responses do not raise."""
        raise_for_api_error(httpx.Response(200, json={}))

    def test_raise_for_api_error_raises_typed_error(self) -> None:
        """Failed responses raise the typed error."""
        with pytest.raises(NotFoundError, match="Chat not found"):
            raise_for_api_error(httpx.Response(404, json={"detail": "Chat not found"}))
