"""ABOUTME: Item picker service launcher.

Reads PickerSettings from the environment and serves the FastAPI app with
uvicorn, binding to 0.0.0.0 by default for container networking.
"""

import logging
from typing import Optional

import uvicorn

from .config import PickerSettings
from .server import create_app
from .service_base import LOG_FORMAT

logger = logging.getLogger(__name__)


def run_server(settings: Optional[PickerSettings] = None) -> None:
    """Run the picker service.

    Args:
        settings: Service settings; read from the environment when omitted
    """
    settings = settings or PickerSettings()
    logging.basicConfig(level=settings.log_level_number, format=LOG_FORMAT)

    app = create_app(settings=settings)

    logger.info(f"Starting item picker service on {settings.host}:{settings.port}")
    if settings.data_file:
        logger.info(f"Serving items from {settings.data_file}")

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run_server()
