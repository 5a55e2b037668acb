"""Process-wide logging setup."""

import logging
from typing import Optional

from boardcore.utils.settings import get_settings

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> int:
    """Apply basicConfig at the requested level (defaults to LOG_LEVEL).

    Returns the numeric level that was applied.
    """
    level_name = (level or get_settings().log_level).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=numeric_level)
    logging.getLogger("boardcore").setLevel(numeric_level)
    logger.info("logging_configured: log_level=%s", logging.getLevelName(numeric_level))
    return numeric_level
