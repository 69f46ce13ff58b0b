"""Logging setup for the relayer service.

Per-request batches flushed by ``log_pending_messages`` go to ``txrelay.pending``
with their own level and format: the line number there is always the flush
call, so it's replaced by the run name the batch is tagged with.
"""

import logging
import logging.config
import os
import sys

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PENDING_LOG_LEVEL = os.getenv("PENDING_LOG_LEVEL", LOG_LEVEL).upper()
LOG_FILE = os.getenv("LOG_FILE")  # console only unless set


def build_logging_config(
    level: str = LOG_LEVEL,
    pending_level: str = PENDING_LOG_LEVEL,
    log_file: str | None = LOG_FILE,
) -> dict:
    handlers = {
        "console": {"class": "logging.StreamHandler", "formatter": "default", "stream": sys.stdout},
        "pending": {"class": "logging.StreamHandler", "formatter": "pending", "stream": sys.stdout},
    }
    if log_file:
        handlers["file"] = {"class": "logging.FileHandler", "formatter": "default", "filename": log_file, "mode": "a"}
        handlers["pending_file"] = {"class": "logging.FileHandler", "formatter": "pending", "filename": log_file, "mode": "a"}
    out = [h for h in ("console", "file") if h in handlers]
    pending_out = [h for h in ("pending", "pending_file") if h in handlers]

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)-6s %(name)8s:%(lineno)d %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "pending": {
                "format": "%(asctime)s %(levelname)-6s %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": {
            "txrelay": {"level": level, "handlers": out, "propagate": False},
            "txrelay.pending": {"level": pending_level, "handlers": pending_out, "propagate": False},
            "uvicorn.access": {"level": "WARNING", "handlers": out, "propagate": False},
            # RPC request/response dumps
            "web3": {"level": "WARNING", "handlers": out, "propagate": False},
        },
        "root": {"level": "WARNING", "handlers": out},
    }


def setup_logging(**overrides):
    logging.config.dictConfig(build_logging_config(**overrides))
    os.environ.setdefault("PYTHONUNBUFFERED", "1")
