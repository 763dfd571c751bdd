"""
Data models for captured artifacts.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass


@dataclass(frozen=True)
class Artifact:
    """A captured frame plus the register/weight published at capture time."""
    id: str
    image_data: str
    mode: str
    bits: str
    weight: float
    timestamp: str

    @property
    def parity_preview(self) -> str:
        encoded = base64.b64encode(self.bits.encode("ascii")).decode("ascii")
        return f"{encoded[:16]}..."

    def to_dict(self, include_image: bool = True) -> dict:
        data = {
            "id": self.id,
            "mode": self.mode,
            "bits": self.bits,
            "weight": f"{self.weight:.4f}",
            "timestamp": self.timestamp,
            "parity_preview": self.parity_preview,
        }
        if include_image:
            data["image_data"] = self.image_data
        return data
