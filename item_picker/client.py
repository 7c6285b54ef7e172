"""ABOUTME: Fetch capabilities for the picker controller.

PickerClient talks to the picker service over HTTP; BackendFetcher calls the
resolution backend in-process. Both expose the same coroutine:

    await fetcher.get("/pickers/user", {"page": 1, "search": "ada"})
    -> {"data": [...], "pagination": {...}}

and raise a PickerError subclass carrying a readable message on failure.
"""

import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from .config import PickerSettings
from .error_handling import (
    ERROR_FETCH_FAILED,
    ERROR_TIMEOUT,
    TransportError,
)
from .http_utils import extract_error_code, extract_error_message, interpret_http_error
from .resolve import ItemStore, get_picker_backend
from .validation import DEFAULT_LIMIT, FIRST_PAGE

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Anything the controller can fetch picker pages from."""

    async def get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        ...


def clean_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset parameters so the service applies its defaults."""
    return {key: value for key, value in params.items() if value is not None and value != ""}


class PickerClient:
    """HTTP client for the picker service."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize picker client.

        Args:
            base_url: URL of the picker service (e.g., http://picker:8000)
            timeout: HTTP request timeout in seconds
            client: Pre-built AsyncClient (tests inject an ASGI transport here)
        """
        if base_url is None or timeout is None:
            config = PickerSettings()
            base_url = base_url or config.base_url
            timeout = timeout or config.client_timeout
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = client or httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)

        logger.info(f"Initialized picker client for {self.base_url}")

    async def get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Fetch one picker page.

        Args:
            endpoint: Picker path (e.g., "/pickers/user") or absolute URL
            params: Request parameters (page, limit, search, parent, ...)

        Returns:
            {"data": [...], "pagination": {...}}

        Raises:
            TransportError: On timeouts, connection failures and error responses
        """
        if not endpoint:
            raise TransportError("No picker endpoint configured")

        try:
            response = await self.client.get(endpoint, params=clean_params(params))
            response.raise_for_status()
            data = response.json()

        except httpx.TimeoutException:
            logger.error(f"Picker request timeout for {endpoint}")
            raise TransportError(
                f"Picker request timed out after {self.timeout} seconds",
                code=ERROR_TIMEOUT
            ) from None

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = extract_error_message(e.response) or f"HTTP Error {status}"
            logger.error(f"Picker request failed for {endpoint}: {status} {message}")
            code = extract_error_code(e.response) or interpret_http_error(status)
            raise TransportError(message, code=code, status_code=status) from e

        except httpx.RequestError as e:
            logger.error(f"Picker request error for {endpoint}: {e}")
            raise TransportError(f"Could not reach picker service: {e}") from e

        except ValueError as e:
            logger.error(f"Invalid picker response from {endpoint}: {e}")
            raise TransportError("Picker service returned invalid JSON", code=ERROR_FETCH_FAILED) from e

        if not isinstance(data, dict) or "data" not in data or "pagination" not in data:
            raise TransportError("Picker service returned an unexpected response", code=ERROR_FETCH_FAILED)

        return data

    async def health_check(self) -> bool:
        """Check if picker service is healthy."""
        try:
            response = await self.client.get("/health", timeout=5.0)
            return response.status_code == 200
        except Exception as e:
            logger.error(f"Picker health check failed: {e}")
            return False

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "PickerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


class BackendFetcher:
    """In-process fetcher resolving pages straight from an item store.

    The last path segment of the endpoint names the kind ("/pickers/user").
    """

    def __init__(self, store: ItemStore, default_limit: int = DEFAULT_LIMIT):
        self.store = store
        self.default_limit = default_limit

    async def get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        kind = (endpoint or "").rstrip("/").rsplit("/", 1)[-1]
        backend = get_picker_backend(kind, self.store)
        params = clean_params(params)

        return backend.fetch(
            parent=params.get("parent"),
            query=params.get("query"),
            search=params.get("search"),
            page=int(params.get("page", FIRST_PAGE)),
            limit=int(params.get("limit", self.default_limit)),
        )
