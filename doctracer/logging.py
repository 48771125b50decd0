"""Logging utilities for doctracer commands.

Verbosity levels:

* ``0``: progress messages (targets inspected, report written).
* ``1`` (``-v``): per-file symbol counts, catalog replacements and layout sizes.
* ``2`` (``-vv``): additionally every malformed tag the docblock parser keeps
  verbatim, which is noisy on large code bases.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "doctracer"
_DOCBLOCK_LOGGER = f"{_LOGGER_NAME}.docblock"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the doctracer hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(*, verbosity: int = 0, log_file: Path | None = None) -> logging.Logger:
    """Configure console output (and an optional file sink) for the given verbosity."""
    level = logging.DEBUG if verbosity >= 1 else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    logging.getLogger(_DOCBLOCK_LOGGER).setLevel(logging.DEBUG if verbosity >= 2 else logging.INFO)

    # repeated CLI invocations in one process must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_format = "[doctracer] %(levelname)s %(message)s"
    if verbosity >= 1:
        console_format = "[doctracer] %(levelname)s %(name)s: %(message)s"
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter(console_format))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
