"""
Logging configuration for the number guessing game.
"""

import logging
import os
import sys

LOG_FORMAT = '[%(asctime)s] %(name)s %(levelname)s: %(message)s'


def setup_logger(name: str, level: str = None) -> logging.Logger:
    """
    Setup a logger that writes to stdout.

    Args:
        name: Logger name (usually module name)
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to env var LOG_LEVEL or INFO

    Returns:
        Configured logger instance
    """
    if level is None:
        level = os.getenv('LOG_LEVEL', 'INFO')
    level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # One handler per logger, even when modules are reloaded
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(console_handler)

    return logger


def set_log_level(level: str, prefix: str = 'number_game'):
    """
    Apply a log level to loggers created from now on and to those that already exist.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        prefix: Only loggers whose name starts with this are changed
    """
    os.environ['LOG_LEVEL'] = level.upper()
    level_value = getattr(logging, level.upper(), logging.INFO)

    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if not isinstance(logger, logging.Logger) or not name.startswith(prefix):
            continue
        logger.setLevel(level_value)
        for handler in logger.handlers:
            handler.setLevel(level_value)
