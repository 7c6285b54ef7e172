"""ABOUTME: Shared error handling for the item picker service and client.

Provides standardized error codes, the picker exception hierarchy, HTTP status
code helpers and error payload creation so the service and the client agree on
one error format.
"""

from typing import Optional, Dict, Any


# =============================================================================
# Error Code Constants
# =============================================================================

# Input validation errors
ERROR_INVALID_PARAMETER: str = "invalid_parameter"
ERROR_VALIDATION_FAILED: str = "validation_failed"

# Resolution errors
ERROR_INVALID_QUERY: str = "invalid_query"
ERROR_RESOLUTION_TYPE: str = "resolution_type"

# Network and fetch errors
ERROR_TIMEOUT: str = "timeout"
ERROR_FETCH_FAILED: str = "fetch_failed"
ERROR_NETWORK_ERROR: str = "network_error"

# Resource errors
ERROR_NOT_FOUND: str = "not_found"
ERROR_RATE_LIMITED: str = "rate_limited"

# General errors
ERROR_UNEXPECTED: str = "unexpected_error"


# =============================================================================
# Exceptions
# =============================================================================

class PickerError(Exception):
    """Base class for all item picker errors.

    Attributes:
        message: Human-readable message, safe to show in the UI
        code: Machine-readable error code (one of the ERROR_* constants)
    """

    code: str = ERROR_UNEXPECTED
    error_type: str = "error"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ResolutionError(PickerError):
    """A query could not be resolved into candidate items."""

    code = ERROR_INVALID_QUERY
    error_type = "resolution_error"


class QueryError(ResolutionError):
    """The query expression references an unknown root or member."""


class ResolutionTypeError(ResolutionError):
    """The query resolved to a value of the wrong kind. Never retried."""

    code = ERROR_RESOLUTION_TYPE


class NotFoundError(PickerError):
    """A kind or context entity does not exist."""

    code = ERROR_NOT_FOUND
    error_type = "not_found_error"


class TransportError(PickerError):
    """The picker endpoint could not be reached or answered with an error."""

    code = ERROR_NETWORK_ERROR
    error_type = "network_error"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, code)
        self.status_code = status_code


# =============================================================================
# HTTP Status Code Helpers
# =============================================================================

class HTTPStatusCodes:
    """Helper methods for HTTP status code checks.

    Provides semantic methods to check HTTP status codes instead of
    hardcoding numeric values throughout the codebase.
    """

    @staticmethod
    def is_rate_limit(status_code: int) -> bool:
        """Check if status code is 429 (Too Many Requests)."""
        return status_code == 429

    @staticmethod
    def is_not_found(status_code: int) -> bool:
        """Check if status code is 404 (Not Found)."""
        return status_code == 404

    @staticmethod
    def is_unprocessable(status_code: int) -> bool:
        """Check if status code is 422 (Unprocessable Entity).

        Example:
            if HTTPStatusCodes.is_unprocessable(response.status_code):
                logger.warning("Picker query rejected")
        """
        return status_code == 422

    @staticmethod
    def is_client_error(status_code: int) -> bool:
        """Check if status code is in range 400-499."""
        return 400 <= status_code < 500

    @staticmethod
    def is_server_error(status_code: int) -> bool:
        """Check if status code is in range 500-599."""
        return 500 <= status_code < 600


def status_code_for(error: PickerError) -> int:
    """Map a picker exception to the HTTP status the service answers with."""
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ResolutionError):
        return 422
    return 500


# =============================================================================
# Main Error Creation Function
# =============================================================================

def create_error_payload(
    error_message: str,
    error_code: str,
    error_type: str = "error",
    additional_metadata: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Create the standardized JSON error body.

    This is the main error creation function used by the service. Use the
    convenience wrapper functions below for common error types.

    Args:
        error_message: Human-readable error message for users
        error_code: Machine-readable error code (use ERROR_* constants)
        error_type: Error category/type (e.g., "resolution_error")
        additional_metadata: Additional context for debugging (optional)

    Returns:
        Dictionary of the form {"error": {"code", "message", "type", ...}}

    Example:
        payload = create_error_payload(
            error_message="Your query must return a set of users",
            error_code=ERROR_RESOLUTION_TYPE,
            error_type="resolution_error",
            additional_metadata={"query": "user.parent"}
        )
    """
    error = {
        "code": error_code,
        "message": error_message,
        "type": error_type,
    }

    if additional_metadata:
        error.update(additional_metadata)

    return {"error": error}


# =============================================================================
# Convenience Wrapper Functions
# =============================================================================

def create_picker_error(
    error: PickerError,
    additional_metadata: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Create an error body from a raised PickerError."""
    return create_error_payload(
        error_message=error.message,
        error_code=error.code,
        error_type=error.error_type,
        additional_metadata=additional_metadata
    )


def create_validation_error(
    field_name: str,
    error_message: str,
    field_value: Any = None
) -> Dict[str, Any]:
    """Create a validation error for invalid request fields.

    Example:
        return create_validation_error(
            field_name="limit",
            error_message="Limit must be between 1 and 100",
            field_value=limit
        )
    """
    metadata = {"field_name": field_name}
    if field_value is not None:
        metadata["field_value"] = field_value

    return create_error_payload(
        error_message=f"{field_name}: {error_message}",
        error_code=ERROR_VALIDATION_FAILED,
        error_type="validation_error",
        additional_metadata=metadata
    )
