"""Entry point for the Cable Network API.

Starts the FastAPI application with Uvicorn.  Intended to be executed
from the project root, e.g. under Docker or a process manager where
only a single Python file is specified.

Host and port are read from the environment variables ``HOST`` and
``PORT`` (defaults ``0.0.0.0`` and ``5000``).  Application settings
(``JWT_SECRET``, ``DATABASE_URL``, ``CLOUDINARY_CLOUD_NAME``, ...)
are documented in ``cable_network_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from cable_network_api.app.main import app


async def run_api() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "5000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    await server.serve()


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    await run_api()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
