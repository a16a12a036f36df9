"""Centralized logging configuration."""

import sys

from loguru import logger as loguru_logger

from status_board.config import settings


log_format = " | ".join(
    (
        "<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>",
        "<lvl>{level:<8}</>",
        "<c>{name}::{function}:{line}</>",
        "{message}",
    )
)

# drop the default handler so records are not printed twice
loguru_logger.remove()
logger = loguru_logger

logger.add(sys.stdout, format=log_format, level=settings.LOG_LEVEL)

logger.add(
    f"{settings.LOG_DIR}/{{time:YYYY-MM-DD}}.log",
    format=log_format,
    level=settings.LOG_LEVEL,
    rotation="1 day",
    retention="30 days",
    compression="zip",
    enqueue=True,
)
