"""Entry point for the user directory service.

Serves the FastAPI application with Uvicorn.  Host and port come from
the ``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0``
and ``3000``).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from user_directory.app.core.config import settings
from user_directory.app.main import app


async def main() -> None:
    """Run the API server until it is stopped."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("Server is running on http://%s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
