"""Logging setup shared by the command line entry points."""

from __future__ import annotations

import logging
import sys

LOGGER_NAMESPACES = ("patternkit", "garment", "exporters", "schemas")

__all__ = ["LOGGER_NAMESPACES", "setup_logging"]


def setup_logging(level: int | str = logging.WARNING, log_file: str | None = None) -> None:
    """Attach console (and optional file) handlers to the project loggers.

    Existing handlers are replaced so repeated calls do not duplicate output.
    """

    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for namespace in LOGGER_NAMESPACES:
        logger = logging.getLogger(namespace)
        logger.setLevel(level)
        if logger.hasHandlers():
            logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    logging.getLogger("patternkit").debug("Logging initialized.")
