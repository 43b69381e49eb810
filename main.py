"""
main.py

Responsibility: Process entry point. Loads settings, configures logging,
and runs the application under uvicorn until SIGHUP, SIGINT or SIGTERM.
Does NOT: contain request handling or DNS logic.
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
from collections.abc import Sequence

import uvicorn

from app import create_app
from config import parse_address, load_settings
from exceptions import ConfigInvalidError

logger = logging.getLogger(__name__)

# Seconds in-flight requests get to finish once shutdown begins
SHUTDOWN_TIMEOUT = 5


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


async def _serve(server: uvicorn.Server) -> None:
    # uvicorn handles SIGINT and SIGTERM itself; SIGHUP is added here.
    if hasattr(signal, "SIGHUP"):
        loop = asyncio.get_running_loop()
        loop.add_signal_handler(signal.SIGHUP, _request_exit, server, "SIGHUP")
    await server.serve()


def _request_exit(server: uvicorn.Server, name: str) -> None:
    logger.info("Shutting down server on %s", name)
    server.should_exit = True


def main(argv: Sequence[str] | None = None) -> int:
    """
    Runs the update endpoint.

    Args:
        argv: Command-line arguments without the program name.

    Returns:
        The process exit status.
    """
    try:
        settings = load_settings(argv)
    except ConfigInvalidError as exc:
        _setup_logging("INFO")
        logger.error("Argument parsing error: %s", exc)
        return 1

    _setup_logging(settings.log_level)

    host, port = parse_address(settings.address)
    app = create_app(settings)
    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_config=None,
        timeout_graceful_shutdown=SHUTDOWN_TIMEOUT,
    )
    server = uvicorn.Server(config)

    logger.info("Starting server on %s", settings.address)
    asyncio.run(_serve(server))
    return 0


if __name__ == "__main__":
    sys.exit(main())
