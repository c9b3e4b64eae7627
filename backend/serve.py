"""Run the booking server under uvicorn.

Usage:
    python -m backend.serve
"""
import logging

import uvicorn

from backend.core.config import Settings, configure_logging
from backend.main import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info('Server is running at http://localhost:%s', settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
