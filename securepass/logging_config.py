# =======================================================================================
# securepass/logging_config.py - Loguru Setup
# =======================================================================================
import sys

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"


def setup_logging(log_level: str = "INFO", debug: bool = False) -> None:
    """Route all application logging to stderr; API_DEBUG forces DEBUG level."""
    level = "DEBUG" if debug else log_level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=_LOG_FORMAT)
