"""
PdfRearrange - Logger Module

This module sets up logging for the application.
"""

import logging

# Default values if config is not available
DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOGGER_NAME = "PdfRearrange"


def setup_logger(
    log_level: int | None = None,
    log_format: str | None = None,
    logger_name: str | None = None,
) -> logging.Logger:
    """Set up and configure the application logger

    Args:
        log_level: Logging level to use (default: INFO)
        log_format: Logging format string (default: standard format)
        logger_name: Name for the logger (default: PdfRearrange)

    Returns:
        A configured Logger instance
    """
    if log_level is None or log_format is None or logger_name is None:
        from pdfrearrange import config

        log_level = config.LOG_LEVEL if log_level is None else log_level
        log_format = config.LOG_FORMAT if log_format is None else log_format
        logger_name = config.LOGGER_NAME if logger_name is None else logger_name

    # Configure basic logging settings
    logging.basicConfig(level=log_level, format=log_format)

    return logging.getLogger(logger_name)


# Create a singleton logger instance
logger = setup_logger()
