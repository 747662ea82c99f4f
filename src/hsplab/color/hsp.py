"""
Scalar RGB <-> HSP conversion.

HSP is Hue, Saturation, Perceived brightness. Hue and saturation are
HSV-like (hue as a fraction of a turn, saturation as 1 - min/max) while
brightness is the luma-weighted quadratic mean of the channels, so the
inverse has to solve the brightness equation for the channel values.

Both functions are total: degenerate inputs (grey, black, fully
saturated) are explicit branches and no float input raises. Values are
not range-checked unless clamp=True is passed.
"""

from __future__ import annotations

import math
from typing import NamedTuple

from hsplab.color.luma import LUMA_WEIGHTS, LumaWeights
from hsplab.color.sectors import (
    SECTOR_ROLES,
    classify_rgb,
    role_weights,
    sector_from_hue,
    sector_hue,
    sector_position,
)


class RGB(NamedTuple):
    """Red, green, blue, conventionally in [0, 1]."""

    r: float
    g: float
    b: float


class HSP(NamedTuple):
    """Hue in [0, 1), saturation in [0, 1], perceived brightness >= 0."""

    h: float
    s: float
    p: float


def _clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def rgb_to_hsp(
    r: float,
    g: float,
    b: float,
    weights: LumaWeights = LUMA_WEIGHTS,
    clamp: bool = False,
) -> HSP:
    """
    Convert one RGB color to HSP.

    Args:
        r, g, b: Channel values
        weights: Luma weights for the brightness term
        clamp: Clamp channels to [0, 1] before converting

    Returns:
        HSP triple. Grey input (r == g == b) has hue 0 and saturation 0
        but still carries its brightness.
    """
    if clamp:
        r, g, b = _clamp01(r), _clamp01(g), _clamp01(b)

    p = weights.brightness(r, g, b)

    if r == g == b:
        return HSP(0.0, 0.0, p)

    channels = (r, g, b)
    sector = classify_rgb(r, g, b)
    hi, mid, lo = (channels[c] for c in SECTOR_ROLES[sector])

    delta = hi - lo
    # Only zero when a channel is NaN; let it propagate
    x = (mid - lo) / delta if delta else math.nan

    hue = sector_hue(sector, x)
    if hue >= 1.0:
        hue -= 1.0

    sat = 0.0 if hi == 0 else 1.0 - lo / hi

    return HSP(hue, sat, p)


def hsp_to_rgb(
    h: float,
    s: float,
    p: float,
    weights: LumaWeights = LUMA_WEIGHTS,
    clamp: bool = False,
) -> RGB:
    """
    Convert one HSP color back to RGB.

    With min_over_max = 1 - s, the min channel is found by inverting

        p^2 = min^2 * (w_max / mom^2 + w_mid * part^2 + w_min)

    where part = mid / min. At s >= 1 the min channel is zero and the
    ratio blows up, so that case solves p^2 = w_max*max^2 + w_mid*mid^2
    directly.

    Args:
        h: Hue as a fraction of a turn
        s: Saturation
        p: Perceived brightness
        weights: Luma weights for the brightness term
        clamp: Wrap hue into [0, 1) and clamp saturation to [0, 1] first

    Returns:
        RGB triple
    """
    if clamp:
        h = h % 1.0 if math.isfinite(h) else 0.0
        s = _clamp01(s)

    sector = sector_from_hue(h)
    x = sector_position(sector, h)
    w_max, w_mid, w_min = role_weights(sector, weights)
    min_over_max = 1.0 - s

    if min_over_max > 0.0:
        part = 1.0 + x * (1.0 / min_over_max - 1.0)
        lo = p / math.sqrt(
            w_max / min_over_max / min_over_max + w_mid * part * part + w_min
        )
        hi = lo / min_over_max
        mid = lo + x * (hi - lo)
    else:
        hi = math.sqrt(p * p / (w_max + w_mid * x * x))
        mid = hi * x
        lo = 0.0

    out = [0.0, 0.0, 0.0]
    max_c, mid_c, min_c = SECTOR_ROLES[sector]
    out[max_c] = hi
    out[mid_c] = mid
    out[min_c] = lo
    return RGB(*out)


def rgba_to_hspa(
    r: float, g: float, b: float, a: float, **kwargs
) -> tuple[float, float, float, float]:
    """Convert an RGBA pixel; alpha is returned unchanged."""
    return (*rgb_to_hsp(r, g, b, **kwargs), a)


def hspa_to_rgba(
    h: float, s: float, p: float, a: float, **kwargs
) -> tuple[float, float, float, float]:
    """Convert an HSPA pixel; alpha is returned unchanged."""
    return (*hsp_to_rgb(h, s, p, **kwargs), a)
