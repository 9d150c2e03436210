"""Entry point for the User Manager API server.

Configuration such as ``DATABASE_URL``, ``API_HOST`` and ``API_PORT``
may be placed in a ``.env`` file in the working directory.

The database is opened by the application's lifespan hook.  If it
cannot be reached the server never starts and the process exits with
status 1.

Usage:
    python run.py
"""
import asyncio
import logging
import sys

from uvicorn import Config, Server

from user_manager_api.app.core.config import settings
from user_manager_api.app.main import app

logger = logging.getLogger(__name__)


async def run_api() -> bool:
    """Serve the API with Uvicorn on ``API_HOST``/``API_PORT``.

    Returns ``False`` if startup failed.
    """
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()
    return server.started


def main() -> None:
    if not asyncio.run(run_api()):
        logger.error("User Manager API failed to start")
        sys.exit(1)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pass
