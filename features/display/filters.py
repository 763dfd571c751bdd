"""
Visual filters keyed to the active mode and the current weight.
"""

from __future__ import annotations

import logging
from enum import Enum

from features.events import EventLog, LogCategory

log = logging.getLogger(__name__)

TELEPORTING_FILTER = "brightness(1.5) grayscale(1) blur(10px) invert(0.1)"


class Mode(str, Enum):
    STANDARD = "STANDARD"
    MATRIX = "MATRIX"
    HEAT = "HEAT"
    GHOST = "GHOST"
    NIGHT = "NIGHT"


def _n(value: float) -> str:
    # Short, stable rendering for CSS (0.5 not 0.5000000001)
    return f"{round(value, 4):g}"


def filter_for(mode: Mode | str, weight: float, job_running: bool = False) -> str:
    """CSS filter string for a mode at a given weight."""
    mode = Mode(mode)
    if job_running:
        return TELEPORTING_FILTER
    w = weight
    if mode is Mode.MATRIX:
        return f"contrast(2.5) grayscale(1) brightness({_n(1.0 + w * 0.4)}) opacity(0.85)"
    if mode is Mode.HEAT:
        return f"invert(1) hue-rotate({_n(140 + w * 140)}deg) saturate({_n(2.5 + w)}) contrast(1.6)"
    if mode is Mode.GHOST:
        return (
            f"brightness({_n(1.4 + w * 0.5)}) contrast(1.8) saturate(0.0) "
            f"hue-rotate(240deg) blur({_n(0.5 + (1 - w))}px)"
        )
    if mode is Mode.NIGHT:
        return f"sepia(1) hue-rotate(100deg) brightness({_n(1.2 + w * 1.5)}) contrast({_n(1.1 + w)}) saturate(0.4)"
    return f"saturate({_n(1.2 + w * 0.5)}) contrast({_n(1.1 + w * 0.1)})"


class DisplayState:
    """Owns the active mode."""

    def __init__(self, events: EventLog, mode: Mode = Mode.STANDARD):
        self.events = events
        self.mode = mode

    def set_mode(self, mode: Mode | str) -> Mode:
        mode = Mode(mode)
        if mode is not self.mode:
            self.mode = mode
            self.events.record(LogCategory.HW, f"Spectrum mode: {mode.value}")
        return self.mode
