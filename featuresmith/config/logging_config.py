"""
Loguru sink configuration shared by the API server and the CLI.
"""

import sys
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{function}:{line} | {message}"
FILE_FORMAT = "{time} | {level} | {name}:{function}:{line} | {message}"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Replace the default loguru sink with the application sinks.

    Args:
        level: Minimum level for the console sink
        log_file: Optional path for a rotating file sink (always DEBUG)
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=CONSOLE_FORMAT)
    if log_file:
        logger.add(log_file, level="DEBUG", format=FILE_FORMAT, rotation="10 MB", retention=5)
    logger.debug(f"Logging configured (level={level.upper()}, file={log_file})")
