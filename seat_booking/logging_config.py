"""Loguru sink setup shared by the CLI and the HTTP app."""

import sys

from loguru import logger


log_format = " | ".join(
    (
        "<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>",
        "<lvl>{level:<8}</>",
        "<c>{name}:{function}:{line}</>",
        "{message}",
    )
)


def configure_logging(level: str = "INFO") -> None:
    logger.remove()  # drop loguru's default stderr handler
    logger.add(sys.stderr, format=log_format, level=level.upper())
