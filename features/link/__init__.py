"""
Link feature — connection state to the external compute backend.

Public API:
    from features.link import LinkSession, LinkStatus, LinkClient
    from features.link import errors
"""

from features.link.client import LinkClient
from features.link.models import LinkSnapshot, LinkStatus
from features.link.session import LinkSession

__all__ = ["LinkClient", "LinkSession", "LinkSnapshot", "LinkStatus"]
