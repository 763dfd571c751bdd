"""
Access feature — PIN keypad gating the rest of the API.

Public API:
    from features.access import AccessGate, AccessState
"""

from features.access.gate import AccessGate, AccessState

__all__ = ["AccessGate", "AccessState"]
