"""
Logging setup
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name: str = None, level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure root logging for command line use and return a named logger.

    Args:
        name: Logger name
        level: Logging level
        log_file: Also write log records to this file

    Returns:
        Logger instance
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
    return logging.getLogger(name)
