"""
Access Gate — a 4-digit PIN compared against a fixed constant.

There is deliberately no lockout after repeated failures; failed attempts
are only counted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import config
from features.events import EventLog, LogCategory

log = logging.getLogger(__name__)

PIN_LENGTH = 4


@dataclass(frozen=True)
class AccessState:
    locked: bool
    digits_entered: int
    failed_attempts: int


class AccessGate:
    def __init__(self, events: EventLog, pin: str | None = None):
        pin = pin or config.ACCESS_PIN
        if len(pin) != PIN_LENGTH or not pin.isdigit():
            raise ValueError(f"Access PIN must be {PIN_LENGTH} digits")
        self.events = events
        self._pin = pin
        self._buffer = ""
        self._locked = True
        self._failed = 0

    @property
    def locked(self) -> bool:
        return self._locked

    def state(self) -> AccessState:
        return AccessState(
            locked=self._locked,
            digits_entered=len(self._buffer),
            failed_attempts=self._failed,
        )

    def press(self, digit: int | str) -> AccessState:
        """Feed one keypad digit."""
        digit = str(digit)
        if len(digit) != 1 or not digit.isdigit():
            raise ValueError(f"Not a keypad digit: {digit!r}")
        if not self._locked or len(self._buffer) >= PIN_LENGTH:
            return self.state()

        self._buffer += digit
        if self._buffer == self._pin:
            self._locked = False
            self._buffer = ""
            self.events.record(LogCategory.SEC, "Handshake verified.")
        elif len(self._buffer) == PIN_LENGTH:
            self._buffer = ""
            self._failed += 1
            self.events.record(LogCategory.ERR, "Invalid PIN.")
        return self.state()

    def lock(self) -> AccessState:
        self._locked = True
        self._buffer = ""
        self.events.record(LogCategory.SEC, "Kernel locked.")
        return self.state()
