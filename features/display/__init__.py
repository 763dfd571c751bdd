"""
Display feature — the active visual mode and its CSS filter string.

Public API:
    from features.display import DisplayState, Mode, filter_for
"""

from features.display.filters import DisplayState, Mode, filter_for

__all__ = ["DisplayState", "Mode", "filter_for"]
