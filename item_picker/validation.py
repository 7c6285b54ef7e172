"""ABOUTME: Shared validation for picker options, pagination and service parameters.

Provides reusable validation logic for page numbers, page sizes, selection
bounds, search terms and parent references. Supports both Pydantic field
validators and standalone validation functions for use outside of models.

Design:
- Constants for the picker's validation limits
- Field validator functions (for @field_validator decorators)
- Standalone validator functions (return tuple[bool, Optional[str]])
"""

from typing import Optional, Tuple

from .http_utils import MAX_HTTP_TIMEOUT, MIN_HTTP_TIMEOUT


# =============================================================================
# Validation Constants
# =============================================================================

# Pagination (page 0 means "unset, let the server pick the first page")
UNSET_PAGE: int = 0
FIRST_PAGE: int = 1
DEFAULT_LIMIT: int = 20
MIN_LIMIT: int = 1
MAX_LIMIT: int = 100

# Selection bounds
MIN_MAX_SELECTION: int = 1

# Search terms
MAX_SEARCH_LENGTH: int = 256

# Parent references look like "<kind>/<id>"
PARENT_SEPARATOR: str = "/"


# =============================================================================
# Pydantic Field Validator Functions (for @field_validator decorators)
# =============================================================================

def validate_page_field(v: int) -> int:
    """Pydantic field validator for page numbers.

    Usage:
        @field_validator("page")
        @classmethod
        def validate_page(cls, v: int) -> int:
            return validate_page_field(v)
    """
    is_valid, error = validate_page(v)
    if not is_valid:
        raise ValueError(error)
    return v


def validate_limit_field(v: int, max_val: int = MAX_LIMIT) -> int:
    """Pydantic field validator for page sizes."""
    is_valid, error = validate_limit(v, max_val=max_val)
    if not is_valid:
        raise ValueError(error)
    return v


def validate_max_selection_field(v: Optional[int]) -> Optional[int]:
    """Pydantic field validator for the optional selection upper bound.

    None means "no bound".
    """
    if v is None:
        return v
    is_valid, error = validate_max_selection(v)
    if not is_valid:
        raise ValueError(error)
    return v


def validate_timeout_field(
    v: float,
    min_val: float = MIN_HTTP_TIMEOUT,
    max_val: float = MAX_HTTP_TIMEOUT
) -> float:
    """Pydantic field validator for HTTP timeouts in seconds.

    Usage:
        @field_validator("client_timeout")
        @classmethod
        def validate_client_timeout(cls, v: float) -> float:
            return validate_timeout_field(v)
    """
    is_valid, error = validate_timeout(v, min_val, max_val)
    if not is_valid:
        raise ValueError(error)
    return v


def validate_parent_field(v: Optional[str]) -> Optional[str]:
    """Pydantic field validator for parent references."""
    if v is None:
        return v
    is_valid, error = validate_parent_reference(v)
    if not is_valid:
        raise ValueError(error)
    return v.strip()


# =============================================================================
# Standalone Validator Functions (for non-Pydantic validation)
# =============================================================================

def validate_page(page: int) -> Tuple[bool, Optional[str]]:
    """Validate a page number and return (is_valid, error_message).

    Page 0 is accepted as the "unset" sentinel.

    Example:
        is_valid, error = validate_page(3)
        if not is_valid:
            print(f"Invalid page: {error}")
    """
    if isinstance(page, bool) or not isinstance(page, int):
        return False, f"Page must be an integer, got {type(page).__name__}"

    if page < UNSET_PAGE:
        return False, f"Page must be at least {UNSET_PAGE}, got {page}"

    return True, None


def validate_limit(
    limit: int,
    min_val: int = MIN_LIMIT,
    max_val: int = MAX_LIMIT
) -> Tuple[bool, Optional[str]]:
    """Validate a page size and return (is_valid, error_message)."""
    if isinstance(limit, bool) or not isinstance(limit, int):
        return False, f"Limit must be an integer, got {type(limit).__name__}"

    if limit < min_val or limit > max_val:
        return False, f"Limit must be between {min_val} and {max_val}, got {limit}"

    return True, None


def validate_max_selection(value: int) -> Tuple[bool, Optional[str]]:
    """Validate the selection upper bound and return (is_valid, error_message)."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False, f"Max must be an integer, got {type(value).__name__}"

    if value < MIN_MAX_SELECTION:
        return False, f"Max must be at least {MIN_MAX_SELECTION}, got {value}"

    return True, None


def validate_timeout(
    timeout: float,
    min_val: float = MIN_HTTP_TIMEOUT,
    max_val: float = MAX_HTTP_TIMEOUT
) -> Tuple[bool, Optional[str]]:
    """Validate a timeout in seconds and return (is_valid, error_message)."""
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        return False, f"Timeout must be a number, got {type(timeout).__name__}"

    if timeout < min_val:
        return False, f"Timeout must be at least {min_val} second(s), got {timeout}"

    if timeout > max_val:
        return False, f"Timeout must be at most {max_val} second(s), got {timeout}"

    return True, None


def validate_search_term(
    term: Optional[str],
    max_length: int = MAX_SEARCH_LENGTH
) -> Tuple[bool, Optional[str]]:
    """Validate a free-text search term and return (is_valid, error_message).

    None and empty strings are valid and mean "no filter".
    """
    if term is None:
        return True, None

    if not isinstance(term, str):
        return False, f"Search term must be a string, got {type(term).__name__}"

    if len(term) > max_length:
        return False, f"Search term too long (max {max_length} characters, got {len(term)})"

    return True, None


def validate_parent_reference(reference: str) -> Tuple[bool, Optional[str]]:
    """Validate a "<kind>/<id>" parent reference.

    Example:
        is_valid, error = validate_parent_reference("user/ada")
    """
    if not isinstance(reference, str):
        return False, f"Parent must be a string, got {type(reference).__name__}"

    kind, separator, item_id = reference.strip().partition(PARENT_SEPARATOR)
    if not separator or not kind or not item_id:
        return False, f"Parent must look like '<kind>{PARENT_SEPARATOR}<id>', got '{reference}'"

    return True, None


def split_parent_reference(reference: str) -> Tuple[str, str]:
    """Split a validated parent reference into (kind, id)."""
    kind, _, item_id = reference.strip().partition(PARENT_SEPARATOR)
    return kind, item_id
