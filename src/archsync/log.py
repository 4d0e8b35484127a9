# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Logging setup for the ``archsync`` command.

ArchSync modules log through loguru. Records emitted by libraries on the
standard ``logging`` module (httpx, httpcore) are forwarded to the same sink.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

# ###############
# Public Interface
# ###############

LOG_FORMAT = "<level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"

# Libraries that log every request; only their warnings reach the sink.
QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str = "INFO") -> None:
    """Send all ArchSync and library log records at *level* or above to stderr."""
    level = level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)

    logging.basicConfig(handlers=[_LoguruBridge()], level=logging.NOTSET, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug("Logging to stderr at level {}", level)


# ################
# Implementation
# ################


class _LoguruBridge(logging.Handler):
    """Forward standard ``logging`` records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        level: str | int = record.levelname if record.levelname in _LOGURU_LEVELS else record.levelno
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame, depth = frame.f_back, depth + 1
        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


_LOGURU_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"})
