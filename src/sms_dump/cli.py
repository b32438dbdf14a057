from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from .config import get_settings
from .db import StorageClient
from .errors import StartupError
from .main import create_app

logger = logging.getLogger(__name__)

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")
LEVEL_ALIASES = {"warn": "warning", "fatal": "critical"}


def log_level(value: str) -> str:
    """Lowercase level name that both logging and uvicorn accept."""
    name = value.strip().lower()
    name = LEVEL_ALIASES.get(name, name)
    if name not in LOG_LEVELS:
        raise argparse.ArgumentTypeError(
            f"invalid log level {value!r} (choose from {', '.join(LOG_LEVELS)})"
        )
    return name


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # Driver heartbeats and topology events are noise at INFO.
    logging.getLogger("pymongo").setLevel(logging.WARNING)


def serve(host: str, port: int, level: str) -> int:
    """
    Connect to MongoDB, then serve until interrupted.

    The connection is made before the port is bound, so an unreachable
    database means no traffic is ever accepted.
    """
    settings = get_settings()
    try:
        storage = StorageClient.connect(settings)
    except StartupError as exc:
        logger.error("%s", exc.message)
        return 1

    app = create_app(settings, storage=storage)
    logger.info("Server started on :%d", port)
    try:
        uvicorn.run(app, host=host, port=port, log_level=level)
    finally:
        storage.close()
    return 0


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(prog="sms-dump", description="Store SMS events in MongoDB.")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    # argparse runs `type` on string defaults too, so LOG_LEVEL is checked here.
    parser.add_argument("--log-level", type=log_level, default=settings.log_level)
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    sys.exit(serve(args.host, args.port, args.log_level))


if __name__ == "__main__":
    main()
