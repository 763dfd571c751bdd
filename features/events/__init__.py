"""
Events feature — the capacity-bounded operational event log.

Public API:
    from features.events import EventLog, LogEntry, LogCategory
"""

from features.events.log import EventLog
from features.events.models import LogCategory, LogEntry

__all__ = ["EventLog", "LogCategory", "LogEntry"]
