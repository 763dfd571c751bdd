"""
Data models for job execution.

A BitRegister is the raw output of one job: a fixed-length, immutable
sequence of 0/1 digits.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

import config


@dataclass(frozen=True)
class BitRegister:
    bits: tuple[int, ...]

    def __post_init__(self):
        if len(self.bits) != config.BIT_COUNT:
            raise ValueError(f"Register must hold {config.BIT_COUNT} bits, got {len(self.bits)}")
        if any(b not in (0, 1) for b in self.bits):
            raise ValueError(f"Register bits must be 0 or 1: {self.bits}")

    @classmethod
    def from_string(cls, bitstring: str) -> BitRegister:
        if any(ch not in "01" for ch in bitstring):
            raise ValueError(f"Not a bitstring: {bitstring!r}")
        return cls(tuple(int(ch) for ch in bitstring))

    @classmethod
    def zeros(cls) -> BitRegister:
        return cls((0,) * config.BIT_COUNT)

    @classmethod
    def draw(cls, rng: random.Random | None = None) -> BitRegister:
        """Draw every bit independently and uniformly from {0, 1}."""
        rng = rng or random
        return cls(tuple(rng.randint(0, 1) for _ in range(config.BIT_COUNT)))

    @property
    def ones(self) -> int:
        return sum(self.bits)

    def __len__(self) -> int:
        return len(self.bits)

    def __str__(self) -> str:
        return "".join(str(b) for b in self.bits)


class RegisterState:
    """Holds the currently published register.

    Replaced wholesale on every successful job; failed jobs never touch it.
    """

    def __init__(self, initial: BitRegister | None = None):
        self._current = initial or BitRegister.zeros()

    @property
    def current(self) -> BitRegister:
        return self._current

    def publish(self, register: BitRegister) -> None:
        self._current = register
