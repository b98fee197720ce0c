"""
Python logging configuration for pyps.

Diagnostics never share stdout with the report: everything logged here
goes to stderr.
"""

import logging
import sys


def setup_logging(level: str = "WARNING") -> None:
    """
    Configure Python logging for the pyps command.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)

    Log Format:
        YYYY-MM-DD HH:MM:SS [LEVEL] Message
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
