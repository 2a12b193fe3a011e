"""
Logging Configuration
Sets up the loggers for the chart packages.
"""
import logging
import sys
from typing import Optional

PACKAGES = ("doughnut", "render", "shared")


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the loggers of the doughnut, render and shared packages.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(formatter)

    for name in PACKAGES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Avoid duplicate output when called more than once
        for old in logger.handlers:
            old.close()
        logger.handlers.clear()
        for h in handlers:
            logger.addHandler(h)

    logging.getLogger("doughnut").debug("Logging initialized.")
