"""
Luma weights shared by both HSP directions.

Perceived brightness is the weighted quadratic mean of the three channels.
The weights are a fixed constant built once at import time.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class LumaWeights:
    """
    Per-channel contribution to perceived brightness.

    Attributes:
        red: Weight of the red channel
        green: Weight of the green channel
        blue: Weight of the blue channel
    """

    red: float
    green: float
    blue: float

    def __iter__(self) -> Iterator[float]:
        return iter((self.red, self.green, self.blue))

    def __getitem__(self, index: int) -> float:
        return (self.red, self.green, self.blue)[index]

    @property
    def total(self) -> float:
        """Sum of the three weights."""
        return self.red + self.green + self.blue

    def brightness(self, r: float, g: float, b: float) -> float:
        """Perceived brightness sqrt(wR*r^2 + wG*g^2 + wB*b^2)."""
        return math.sqrt(self.red * r * r + self.green * g * g + self.blue * b * b)

    def as_array(self) -> NDArray[np.float64]:
        """Weights as a read-only float64 vector in RGB order."""
        arr = np.array([self.red, self.green, self.blue], dtype=np.float64)
        arr.flags.writeable = False
        return arr


# Rec. 601 luma coefficients
LUMA_WEIGHTS = LumaWeights(0.299, 0.587, 0.114)
