"""Utilities for logging.

Authors: sfmstats developers
"""

import logging
import socket
import sys
from datetime import datetime, timezone
from logging import LoggerAdapter
from typing import Optional

from dask import distributed

LOGGER_NAME = "sfmstats-logger"

# Set once per process, the first time something is logged.
_WORKER_ID_CACHE: Optional[str] = None


def _detect_worker_id() -> str:
    """Returns "hostname(port)" inside a dask worker, or "hostname-main" in the main process."""
    hostname = socket.gethostname()
    try:
        worker = distributed.get_worker()
    except (ImportError, ValueError, AttributeError):
        return f"{hostname}-main"

    port = worker.address.split(":")[-1]
    return f"{hostname}({port})"


def get_worker_id() -> str:
    """Get the cached worker ID for the current process."""
    global _WORKER_ID_CACHE

    if _WORKER_ID_CACHE is None:
        _WORKER_ID_CACHE = _detect_worker_id()
    return _WORKER_ID_CACHE


class WorkerAwareAdapter(LoggerAdapter):
    """LoggerAdapter that injects the dask worker ID into every LogRecord.

    Worker detection is lazy: the dask worker context is not available at import time, so it happens on the first
    log call instead of at adapter creation.
    """

    def __init__(self, logger: logging.Logger) -> None:
        super().__init__(logger, {})

    def process(self, msg, kwargs):
        kwargs.setdefault("extra", {})["worker_id"] = get_worker_id()
        return msg, kwargs


class UTCFormatter(logging.Formatter):
    """Formatter with UTC timestamps."""

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return dt.strftime(datefmt or "%Y-%m-%d %H:%M:%S")


def get_logger() -> LoggerAdapter:
    """Get the main logger, tagged with the worker it runs on.

    Log format:
        "2025-10-28 00:00:45 [hornet(40665)] [residuals.py] INFO: message"

    Returns:
        Configured logger adapter instance.
    """
    logger = logging.getLogger(LOGGER_NAME)

    if not logger.handlers:
        logger.setLevel(logging.INFO)
        handler = logging.StreamHandler(sys.stdout)
        fmt = "%(asctime)s [%(worker_id)s] [%(filename)s] %(levelname)s: %(message)s"
        handler.setFormatter(UTCFormatter(fmt, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    return WorkerAwareAdapter(logger)
