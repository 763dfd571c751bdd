"""Unit tests for the mode-keyed visual filters."""

import pytest

from features.display import DisplayState, Mode, filter_for
from features.display.filters import TELEPORTING_FILTER
from features.events import LogCategory


def test_teleporting_overrides_mode():
    for mode in Mode:
        assert filter_for(mode, 0.5, job_running=True) == TELEPORTING_FILTER


@pytest.mark.parametrize("mode,weight,expected", [
    (Mode.STANDARD, 0.0, "saturate(1.2) contrast(1.1)"),
    (Mode.STANDARD, 0.5, "saturate(1.45) contrast(1.15)"),
    (Mode.MATRIX, 0.5, "contrast(2.5) grayscale(1) brightness(1.2) opacity(0.85)"),
    (Mode.HEAT, 0.5, "invert(1) hue-rotate(210deg) saturate(3) contrast(1.6)"),
    (Mode.GHOST, 0.0, "brightness(1.4) contrast(1.8) saturate(0.0) hue-rotate(240deg) blur(1.5px)"),
    (Mode.NIGHT, 0.0, "sepia(1) hue-rotate(100deg) brightness(1.2) contrast(1.1) saturate(0.4)"),
])
def test_filter_strings(mode, weight, expected):
    assert filter_for(mode, weight) == expected


def test_set_mode_logs_once(events):
    display = DisplayState(events)
    display.set_mode("HEAT")
    display.set_mode(Mode.HEAT)
    hw = [e for e in events.entries() if e.category is LogCategory.HW]
    assert display.mode is Mode.HEAT
    assert len(hw) == 1


def test_unknown_mode(events):
    with pytest.raises(ValueError):
        DisplayState(events).set_mode("SEPIA")


def test_plain_string_mode():
    assert filter_for("HEAT", 0.5) == filter_for(Mode.HEAT, 0.5)
    with pytest.raises(ValueError):
        filter_for("SEPIA", 0.5)
