"""Logging setup shared by all tools."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_FORMAT = "%(message)s"
_DATE_FORMAT = "[%X]"


def setup_logger(name: Optional[str] = None, level: str = "INFO") -> logging.Logger:
    """
    Configure root logging with a rich handler.

    Args:
        name: Logger name to return (root logger if None)
        level: Log level name (DEBUG, INFO, WARNING, ...)

    Returns:
        Configured logger
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        root.addHandler(handler)

    # Chatty transport loggers stay quiet unless debugging
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel("DEBUG" if level.upper() == "DEBUG" else "WARNING")

    return logging.getLogger(name)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)
