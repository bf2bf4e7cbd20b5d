import os
import sys

from loguru import logger

from config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - "
    "<level>{message}</level>"
)


def setup_logger(
    *,
    json_logs: bool = settings.json_logs,
    level: str = settings.log_level,
    log_file: str | None = settings.log_file or None,
) -> None:
    """Route curvequote logs to stderr so CLI output on stdout stays parseable.

    LOG_LEVEL env overrides ``level``. A ``log_file`` sink records DEBUG
    (cache hits, RPC retries) regardless of the console level.
    """
    console_level = os.getenv("LOG_LEVEL", level).upper()
    logger.remove()
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=console_level,
        colorize=not json_logs,
        serialize=json_logs,
    )

    if log_file:
        logger.add(
            log_file,
            rotation="50 MB",
            retention="3 days",
            compression="gz",
            level="DEBUG",
            serialize=json_logs,
        )
