"""ABOUTME: HTTP helpers for the picker client - status interpretation and error extraction."""

from typing import Optional

import httpx

from .error_handling import (
    ERROR_FETCH_FAILED,
    ERROR_INVALID_PARAMETER,
    ERROR_NETWORK_ERROR,
    ERROR_NOT_FOUND,
    ERROR_RATE_LIMITED,
    ERROR_VALIDATION_FAILED,
    HTTPStatusCodes,
)

# Constants
DEFAULT_HTTP_TIMEOUT = 10.0
MIN_HTTP_TIMEOUT = 1.0
MAX_HTTP_TIMEOUT = 300.0


def interpret_http_error(status_code: int) -> str:
    """Map HTTP status code to picker error code."""
    if HTTPStatusCodes.is_rate_limit(status_code):
        return ERROR_RATE_LIMITED
    elif HTTPStatusCodes.is_not_found(status_code):
        return ERROR_NOT_FOUND
    elif HTTPStatusCodes.is_unprocessable(status_code):
        return ERROR_VALIDATION_FAILED
    elif HTTPStatusCodes.is_client_error(status_code):
        return ERROR_INVALID_PARAMETER
    elif HTTPStatusCodes.is_server_error(status_code):
        return ERROR_FETCH_FAILED
    else:
        return ERROR_NETWORK_ERROR


def extract_error_code(response: httpx.Response) -> Optional[str]:
    """Error code from the service's {"error": {"code": ...}} body, if present."""
    try:
        data = response.json()
    except ValueError:
        return None

    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        return data["error"].get("code")
    return None


def extract_error_message(response: httpx.Response) -> Optional[str]:
    """Pull the human-readable message out of an error response body.

    Understands the service's own {"error": {"message": ...}} body and
    FastAPI's {"detail": ...} validation body.
    """
    try:
        data = response.json()
    except ValueError:
        return None

    if not isinstance(data, dict):
        return None

    error = data.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])

    detail = data.get("detail")
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list) and detail:
        first = detail[0]
        if isinstance(first, dict) and first.get("msg"):
            location = ".".join(str(part) for part in first.get("loc", []))
            return f"{location}: {first['msg']}" if location else str(first["msg"])

    return None


__all__ = [
    "DEFAULT_HTTP_TIMEOUT",
    "MIN_HTTP_TIMEOUT",
    "MAX_HTTP_TIMEOUT",
    "interpret_http_error",
    "extract_error_code",
    "extract_error_message",
    "HTTPStatusCodes",
]
