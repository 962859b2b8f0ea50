"""
Run the gateway with uvicorn: ``python -m booking_gateway``.
"""

from __future__ import annotations

import logging
import sys

import uvicorn

from booking_gateway.app import create_app
from booking_gateway.config import get_settings
from booking_gateway.errors import ConfigurationError

logger = logging.getLogger("booking_gateway")


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(name)-24s %(levelname)-7s %(message)s",
    )
    try:
        app = create_app(settings)
    except ConfigurationError as e:
        logger.error("Missing Supabase configuration: %s", ", ".join(e.missing))
        for name, value in settings.masked_credentials().items():
            logger.error("%s: %s", name, value)
        sys.exit(1)

    logger.info("Server running on http://localhost:%d", settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
