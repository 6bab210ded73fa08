"""Error taxonomy and response error normalization.

Every non-2xx response is reduced to one human readable message. The
exception class is picked from the HTTP status so callers can react to an
expired session without inspecting the message text.
"""

from typing import Any

import httpx

DEFAULT_ERROR_MESSAGE = "An error occurred"

STATUS_MESSAGES: dict[int, str] = {
    401: "Authentication failed",
    403: "Access denied",
    404: "Resource not found",
    422: "Invalid data provided",
}
SERVER_ERROR_MESSAGE = "Server error occurred"


class ApiError(Exception):
    """Raised when the Hexy API rejects a request.

    Attributes:
        message: Normalized, user facing message.
        status_code: HTTP status, or None when no response was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class AuthenticationError(ApiError):
    """401: the stored credential is missing, invalid or expired."""


class PermissionDeniedError(ApiError):
    """403: the account may not perform the operation."""


class NotFoundError(ApiError):
    """404: the addressed resource does not exist."""


class InvalidDataError(ApiError):
    """422: the server rejected the request payload."""


class ServerError(ApiError):
    """5xx: the server failed to handle the request."""


class ApiConnectionError(ApiError):
    """The request never produced a response (DNS, refused, timeout)."""


_ERRORS_BY_STATUS: dict[int, type[ApiError]] = {
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
    422: InvalidDataError,
}


def status_message(status_code: int) -> str:
    """Fixed message for a status when the body carries no detail."""
    if status_code in STATUS_MESSAGES:
        return STATUS_MESSAGES[status_code]
    if status_code >= 500:
        return SERVER_ERROR_MESSAGE
    return f"Request failed with status: {status_code}"


def _format_validation_entry(entry: Any) -> str:
    if not isinstance(entry, dict):
        return f"Field: {entry}"
    loc = entry.get("loc")
    field = None
    if isinstance(loc, (list, tuple)) and len(loc) > 1:
        field = loc[1]
    return f"{field or 'Field'}: {entry.get('msg')}"


def detail_message(body: Any) -> str:
    """Extract the message from a parsed FastAPI style error body.

    Args:
        body: Parsed JSON error body.

    Returns:
        The string ``detail``, the joined validation errors, or the
        generic fallback message.
    """
    if not isinstance(body, dict):
        return DEFAULT_ERROR_MESSAGE

    detail = body.get("detail")
    if isinstance(detail, str) and detail:
        return detail
    if isinstance(detail, list) and detail:
        return ", ".join(_format_validation_entry(entry) for entry in detail)
    return DEFAULT_ERROR_MESSAGE


def error_message(response: httpx.Response) -> str:
    """Normalize a failed response into a single message.

    Args:
        response: A response with a non-success status.

    Returns:
        Message taken from the JSON body, or a fixed message for the status
        when the body is not JSON or is a bare scalar such as ``null``.
    """
    try:
        body = response.json()
    except ValueError:
        return status_message(response.status_code)
    if not isinstance(body, (dict, list)):
        return status_message(response.status_code)
    return detail_message(body)


def error_class(status_code: int | None) -> type[ApiError]:
    """Exception class matching an HTTP status."""
    if status_code is None:
        return ApiConnectionError
    if status_code >= 500:
        return ServerError
    return _ERRORS_BY_STATUS.get(status_code, ApiError)


def api_error_from_response(response: httpx.Response) -> ApiError:
    """Build the typed, normalized error for a failed response."""
    message = error_message(response)
    return error_class(response.status_code)(message, response.status_code)


def raise_for_api_error(response: httpx.Response) -> None:
    """Raise the normalized error when the response is not a success.

    Raises:
        ApiError: Subclass chosen by status code.
    """
    if not response.is_success:
        raise api_error_from_response(response)
