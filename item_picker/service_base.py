"""ABOUTME: Base class for the picker HTTP service with common initialization and logging patterns."""

import logging
from typing import Any, Optional

from fastapi import FastAPI

from .config import PickerSettings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(logger_name: str, level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the picker service.

    Args:
        logger_name: Name of the logger (typically __name__)
        level: Logging level (default: logging.INFO)

    Returns:
        Configured logger instance
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return logging.getLogger(logger_name)


class PickerServiceBase:
    """Base class for the picker service.

    Provides:
    - FastAPI application creation
    - Consistent logging setup
    - Request start/complete/error log helpers
    """

    def __init__(
        self,
        service_name: str,
        settings: Optional[PickerSettings] = None,
        **app_kwargs: Any
    ):
        """Initialize service base.

        Args:
            service_name: Name of the service (e.g., "item-picker")
            settings: Service settings; read from the environment when omitted
            **app_kwargs: Extra FastAPI arguments (lifespan, version, ...)
        """
        self.service_name = service_name
        self.settings = settings or PickerSettings()
        self.app = FastAPI(title=service_name, **app_kwargs)
        self.logger = setup_logging(__name__, self.settings.log_level_number)

    def get_logger(self) -> logging.Logger:
        return self.logger

    def get_app(self) -> FastAPI:
        return self.app

    def log_request_start(self, operation: str, **params) -> None:
        """Log an incoming request with its parameters.

        Examples:
            >>> service.log_request_start("pick", kind="user", page=1)
        """
        if params:
            param_str = ", ".join(f"{k}={v}" for k, v in params.items())
            self.logger.info(f"{operation} started: {param_str}")
        else:
            self.logger.info(f"{operation} started")

    def log_request_complete(self, operation: str, **metrics) -> None:
        """Log request completion with result metrics.

        Examples:
            >>> service.log_request_complete("pick", items=20, total=42)
        """
        if metrics:
            metric_str = ", ".join(f"{k}={v}" for k, v in metrics.items())
            self.logger.info(f"{operation} completed: {metric_str}")
        else:
            self.logger.info(f"{operation} completed")

    def log_request_error(
        self,
        operation: str,
        error_code: str,
        error_message: str,
        **context
    ) -> None:
        """Log a failed request with context.

        Examples:
            >>> service.log_request_error("pick", "resolution_type", "Your query must return a set of users")
        """
        context_str = ", ".join(f"{k}={v}" for k, v in context.items()) if context else ""
        if context_str:
            self.logger.error(f"{operation} error [{error_code}]: {error_message} ({context_str})")
        else:
            self.logger.error(f"{operation} error [{error_code}]: {error_message}")
