"""Entry point for the Contact Store API.

Starts the FastAPI application under Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Host, port, database file and log level are read from the
environment (``HOST``, ``PORT``, ``DATABASE_URL``, ``LOG_LEVEL``).

Usage:
    PORT=3000 python run.py
"""
import asyncio

from uvicorn import Config, Server

from contact_store_api.app.core.config import settings
from contact_store_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
