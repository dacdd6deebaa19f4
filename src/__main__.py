"""Process entry point: ``python -m src``."""

import logging

import uvicorn

from src.api.main import app
from src.config import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Bind the configured port and serve until interrupted."""
    settings = get_settings()
    logger.info("PDF unlocker listening on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
