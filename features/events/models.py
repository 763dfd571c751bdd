"""
Data models for the event log.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LogCategory(str, Enum):
    SEC = "SEC"
    LINK = "LINK"
    ERR = "ERR"
    WARN = "WARN"
    DEBUG = "DEBUG"
    QASM = "QASM"
    CORE = "CORE"
    SYS = "SYS"
    HW = "HW"
    QML = "QML"
    AI = "AI"


@dataclass(frozen=True)
class LogEntry:
    """A single operational event, as shown in the audit panel."""
    id: str
    category: LogCategory
    message: str
    detail: str | None = None
    timestamp: str = ""
