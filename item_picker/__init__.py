"""ABOUTME: Item picker - selection dialog state and the item resolution service behind it."""

from .client import BackendFetcher, PickerClient
from .config import PickerSettings
from .controller import (
    HeadlessDialog,
    LoggingErrorReporter,
    PaginationState,
    PickerOptions,
    SelectionController,
    SelectionSet,
    ToggleButtonState,
)
from .error_handling import (
    # Error code constants
    ERROR_INVALID_PARAMETER,
    ERROR_VALIDATION_FAILED,
    ERROR_INVALID_QUERY,
    ERROR_RESOLUTION_TYPE,
    ERROR_TIMEOUT,
    ERROR_FETCH_FAILED,
    ERROR_NETWORK_ERROR,
    ERROR_NOT_FOUND,
    ERROR_RATE_LIMITED,
    ERROR_UNEXPECTED,
    # Exceptions
    PickerError,
    ResolutionError,
    QueryError,
    ResolutionTypeError,
    NotFoundError,
    TransportError,
    # HTTP status code helpers
    HTTPStatusCodes,
    # Error creation functions
    create_error_payload,
    create_picker_error,
    create_validation_error,
)
from .resolve import ItemPickerBackend, ItemStore, get_picker_backend

__all__ = [
    "BackendFetcher",
    "PickerClient",
    "PickerSettings",
    "HeadlessDialog",
    "LoggingErrorReporter",
    "PaginationState",
    "PickerOptions",
    "SelectionController",
    "SelectionSet",
    "ToggleButtonState",
    # Error code constants
    "ERROR_INVALID_PARAMETER",
    "ERROR_VALIDATION_FAILED",
    "ERROR_INVALID_QUERY",
    "ERROR_RESOLUTION_TYPE",
    "ERROR_TIMEOUT",
    "ERROR_FETCH_FAILED",
    "ERROR_NETWORK_ERROR",
    "ERROR_NOT_FOUND",
    "ERROR_RATE_LIMITED",
    "ERROR_UNEXPECTED",
    # Exceptions
    "PickerError",
    "ResolutionError",
    "QueryError",
    "ResolutionTypeError",
    "NotFoundError",
    "TransportError",
    # HTTP status code helpers
    "HTTPStatusCodes",
    # Error creation functions
    "create_error_payload",
    "create_picker_error",
    "create_validation_error",
    "ItemPickerBackend",
    "ItemStore",
    "get_picker_backend",
]
