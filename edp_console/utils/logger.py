"""
Logging setup for the EDP admin console.

The console logs through loguru. ``setup_logging`` installs the sinks from
settings and routes the standard library loggers of the server stack into
loguru; it is called once by the API lifespan and by the CLI.
"""

import inspect
import logging
import sys

from loguru import logger

from ..settings import Settings

LOG_FILE_NAME = "edp-console.log"

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# Stdlib loggers of the server, the database layer and the resource client
INTERCEPTED_LOGGERS = (
    "uvicorn",
    "uvicorn.error",
    "uvicorn.access",
    "fastapi",
    "sqlalchemy",
    "httpx",
)


class InterceptHandler(logging.Handler):
    """Forward standard library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        level: str | int
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging module frames so loguru reports the real caller
        frame, depth = inspect.currentframe(), 0
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(config: Settings) -> None:
    """Configure loguru sinks from settings.

    Logs go to stderr and, when ``log_to_file`` is set, to a rotated and
    compressed file in the configured log directory.

    Args:
        config: Application settings
    """
    log_format = config.log_format or DEFAULT_FORMAT

    logger.remove()
    logger.add(sys.stderr, level=config.log_level, format=log_format, colorize=True)

    if config.log_to_file:
        log_dir = config.get_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_dir / LOG_FILE_NAME),
            level=config.log_level,
            format=log_format,
            rotation=config.log_rotation,
            retention=config.log_retention,
            compression="zip",
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in INTERCEPTED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

    logger.debug(f"Logging configured at level {config.log_level}")


__all__ = ["InterceptHandler", "logger", "setup_logging"]
