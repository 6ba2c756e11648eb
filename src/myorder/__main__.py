"""myorder entrypoint.

Run with:
  python -m myorder
"""

import logging
import os
import sys

import uvicorn
from jinja2 import TemplateError

from myorder.app import create_app
from myorder.config import load_settings
from myorder.database import connect, session_factory
from myorder.errors import AppError
from myorder.store import UserStore

logger = logging.getLogger("myorder")


def main() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        settings = load_settings()
    except AppError as e:
        logger.error("%s", e)
        sys.exit(1)

    try:
        engine = connect(settings.database_url)
    except AppError as e:
        logger.error("Failed to connect to database: %s", e)
        sys.exit(1)

    try:
        try:
            app = create_app(UserStore(session_factory(engine)))
        except TemplateError as e:
            logger.error("Failed to initialize handler: %s", e)
            sys.exit(1)

        logger.info("Server is starting on %s:%s", settings.host, settings.port)
        # uvicorn traps SIGINT/SIGTERM, stops accepting connections and waits
        # for in-flight requests up to the timeout before closing them.
        uvicorn.run(
            app,
            host=settings.host,
            port=settings.port,
            timeout_graceful_shutdown=settings.shutdown_timeout,
        )
    finally:
        engine.dispose()
    logger.info("Server stopped")


if __name__ == "__main__":
    main()
