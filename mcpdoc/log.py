"""Logging helpers for the documentation server."""

import logging
import sys

LOGGER_NAME = "mcpdoc"


def setup_logging(level: str = "INFO", include_timestamp: bool = True) -> None:
    """Set up logging for the server.

    Records go to stderr because stdout carries the stdio transport.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        include_timestamp: Whether to include timestamp in log messages
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if include_timestamp:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    else:
        format_string = "%(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=format_string,
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger(LOGGER_NAME).setLevel(log_level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the package logger, e.g. ``mcpdoc.fetcher``."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
