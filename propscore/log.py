"""
Logging setup
Installs a single loguru sink at the configured level.
"""

import sys
from typing import Optional

from loguru import logger

from propscore.config import settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[scope]}</cyan> | {message}"
)


def _scope(record: dict) -> None:
    """Pick the bound component/agent/source name for the format string"""
    extra = record["extra"]
    extra["scope"] = (
        extra.get("component")
        or extra.get("agent")
        or extra.get("source")
        or record["name"]
    )


def setup_logging(level: Optional[str] = None) -> None:
    """
    Replace loguru's default sink with one stderr sink.

    Args:
        level: log level, defaults to settings.LOG_LEVEL
    """
    logger.remove()
    logger.configure(patcher=_scope)
    logger.add(
        sys.stderr,
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
