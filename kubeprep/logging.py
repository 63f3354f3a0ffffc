"""Logging configuration for the kubeprep package."""
import logging
import sys

from .config import Config


def setup_logger(name: str = "kubeprep", debug: bool = False) -> logging.Logger:
    """
    Set up the package logger.

    Args:
        name: The name of the logger
        debug: Log at DEBUG instead of the configured LOG_LEVEL

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if debug else getattr(logging, Config.LOG_LEVEL, logging.INFO)
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Replace handlers so repeated setup binds to the current stdout
    logger.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    formatter = logging.Formatter(Config.LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Disable debug logging for noisy libraries
    if not debug:
        logging.getLogger('urllib3').setLevel(logging.WARNING)

    return logger
