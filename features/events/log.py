"""
Event Log — append-only, capacity-bounded record of operational events.

Entries are kept newest-first. Inserting past capacity evicts the oldest.
Every entry is mirrored to the module logger so the audit trail also lands
in the process log.
"""

from __future__ import annotations

import logging
import uuid
from collections import deque
from datetime import datetime

import config
from features.events.models import LogCategory, LogEntry

log = logging.getLogger(__name__)

_LEVELS = {
    LogCategory.ERR: logging.ERROR,
    LogCategory.WARN: logging.WARNING,
    LogCategory.DEBUG: logging.DEBUG,
}


class EventLog:
    """Newest-first ring of LogEntry objects shared by every component."""

    def __init__(self, capacity: int = config.LOG_CAPACITY):
        self.capacity = capacity
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    def record(
        self,
        category: LogCategory | str,
        message: str,
        detail: str | None = None,
        timestamp: str | None = None,
    ) -> LogEntry:
        """Prepend a new entry. Never raises."""
        try:
            category = LogCategory(category)
        except ValueError:
            log.warning("Unknown log category %r, filing under SYS", category)
            category = LogCategory.SYS

        entry = LogEntry(
            id=uuid.uuid4().hex[:12],
            category=category,
            message=message,
            detail=detail,
            timestamp=timestamp or datetime.now().strftime("%H:%M:%S"),
        )
        self._entries.appendleft(entry)

        level = _LEVELS.get(category, logging.INFO)
        if detail:
            log.log(level, "[%s] %s (%s)", category.value, message, detail)
        else:
            log.log(level, "[%s] %s", category.value, message)
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> list[LogEntry]:
        return list(self._entries)

    def latest(self) -> LogEntry | None:
        return self._entries[0] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)
