"""Deferred log entries.

Submitters run concurrently, so instead of logging as they go they return a
list of PendingLog entries which the orchestrator flushes in one batch once
the submission has finished. That keeps each request's lines together in the
output.
"""

import logging
from dataclasses import dataclass

log = logging.getLogger("txrelay.pending")


@dataclass(frozen=True, slots=True)
class PendingLog:
    level: int
    message: str
    error: BaseException | None = None


def pend(level: int | str, message: str, error: BaseException | None = None) -> PendingLog:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    return PendingLog(level=level, message=message, error=error)


def log_pending_messages(name: str, logs: list[PendingLog]) -> None:
    for entry in logs:
        log.log(entry.level, "[%s] %s", name, entry.message, exc_info=entry.error)
