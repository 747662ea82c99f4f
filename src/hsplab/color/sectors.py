"""
Hue sectors for the HSP model.

The hue circle is split into six bands of width 1/6. Each band has a fixed
ordering of the RGB channels, so the band index alone says which physical
channel plays the max, mid and min role. Both conversion directions look
roles up here instead of spelling out six branches each.
"""

from __future__ import annotations

from enum import IntEnum

import numpy as np
from numpy.typing import NDArray

from hsplab.color.luma import LumaWeights


class Channel(IntEnum):
    """RGB channel index."""

    RED = 0
    GREEN = 1
    BLUE = 2


class HueSector(IntEnum):
    """The six hue bands, named by channel ordering."""

    RGB = 0  # R>G>B
    GRB = 1  # G>R>B
    GBR = 2  # G>B>R
    BGR = 3  # B>G>R
    BRG = 4  # B>R>G
    RBG = 5  # R>B>G

    @property
    def roles(self) -> tuple[Channel, Channel, Channel]:
        """(max, mid, min) channels for this sector."""
        return SECTOR_ROLES[self]

    @property
    def descending(self) -> bool:
        """True when hue decreases as mid approaches max (odd sectors)."""
        return bool(self & 1)


# sector -> (max channel, mid channel, min channel)
SECTOR_ROLES: dict[HueSector, tuple[Channel, Channel, Channel]] = {
    HueSector.RGB: (Channel.RED, Channel.GREEN, Channel.BLUE),
    HueSector.GRB: (Channel.GREEN, Channel.RED, Channel.BLUE),
    HueSector.GBR: (Channel.GREEN, Channel.BLUE, Channel.RED),
    HueSector.BGR: (Channel.BLUE, Channel.GREEN, Channel.RED),
    HueSector.BRG: (Channel.BLUE, Channel.RED, Channel.GREEN),
    HueSector.RBG: (Channel.RED, Channel.BLUE, Channel.GREEN),
}

# Same table as an int array, rows indexed by sector
ROLE_INDEX: NDArray[np.intp] = np.array(
    [[int(c) for c in SECTOR_ROLES[s]] for s in HueSector], dtype=np.intp
)
ROLE_INDEX.flags.writeable = False


def classify_rgb(r: float, g: float, b: float) -> HueSector:
    """
    Find the hue sector of an RGB triple from channel comparisons.

    The max channel is tested in R, G, B order with >=. Within the band of
    the max channel, a tie between the other two picks the even sector
    for red (so pure red lands on hue 0, not 1) and the odd sector for
    green and blue; both give the same hue at the band edge.

    Args:
        r, g, b: Channel values

    Returns:
        Sector whose ordering matches the input
    """
    if r >= g and r >= b:
        return HueSector.RGB if g >= b else HueSector.RBG
    if g >= r and g >= b:
        return HueSector.GRB if r >= b else HueSector.GBR
    return HueSector.BGR if g >= r else HueSector.BRG


def sector_from_hue(hue: float) -> HueSector:
    """
    Find the hue sector of a hue value.

    Hue below 1/6 (negative included) is sector 0; everything not below
    5/6 (hue >= 1 and NaN included) is sector 5.
    """
    for sector in HueSector:
        if sector == HueSector.RBG or hue < (sector + 1) / 6.0:
            return sector
    return HueSector.RBG


def sector_position(sector: HueSector, hue: float) -> float:
    """
    Fold a hue into the normalized position x of its sector.

    x is 0 at the band edge where mid equals min and 1 where mid equals max.
    """
    if sector & 1:
        return (sector + 1) - 6.0 * hue
    return 6.0 * hue - sector


def sector_hue(sector: HueSector, x: float) -> float:
    """Inverse of sector_position."""
    if sector & 1:
        return ((sector + 1) - x) / 6.0
    return (sector + x) / 6.0


def role_weights(
    sector: HueSector, weights: LumaWeights
) -> tuple[float, float, float]:
    """Luma weights attached to the (max, mid, min) roles of a sector."""
    hi, mid, lo = SECTOR_ROLES[sector]
    return weights[hi], weights[mid], weights[lo]


# =============================================================================
# Vectorized helpers
# =============================================================================

def np_classify_rgb(
    r: NDArray, g: NDArray, b: NDArray
) -> NDArray[np.intp]:
    """Vectorized classify_rgb. NaN pixels fall through to sector 4."""
    r_max = (r >= g) & (r >= b)
    g_max = ~r_max & (g >= r) & (g >= b)
    b_max = ~r_max & ~g_max

    return np.select(
        [
            r_max & (g >= b),
            r_max,
            g_max & (r >= b),
            g_max,
            b_max & (g >= r),
        ],
        [
            HueSector.RGB,
            HueSector.RBG,
            HueSector.GRB,
            HueSector.GBR,
            HueSector.BGR,
        ],
        default=HueSector.BRG,
    ).astype(np.intp)


def np_sector_from_hue(hue: NDArray) -> NDArray[np.intp]:
    """Vectorized sector_from_hue."""
    sector = np.full(np.shape(hue), HueSector.RGB, dtype=np.intp)
    for k in range(1, 6):
        # NaN compares False everywhere; route it to the last sector
        sector = np.where((hue >= k / 6.0) | np.isnan(hue), k, sector)
    return sector


def np_sector_position(sector: NDArray[np.intp], hue: NDArray) -> NDArray:
    """Vectorized sector_position."""
    odd = (sector & 1) == 1
    return np.where(odd, (sector + 1) - 6.0 * hue, 6.0 * hue - sector)
