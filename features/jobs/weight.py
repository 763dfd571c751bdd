"""
Register weight derivation.

weight = round(ones / length * DAMPING, 4), with DAMPING = 1 - 1/pi^2 taken
to 8 decimal digits once at import.
"""

from __future__ import annotations

import math

from features.jobs.models import BitRegister

PI_SQUARED_INV = round(1 / math.pi ** 2, 8)
DAMPING = 1 - PI_SQUARED_INV


def derive_weight(register: BitRegister) -> float:
    raw = register.ones / len(register)
    return round(raw * DAMPING, 4)
