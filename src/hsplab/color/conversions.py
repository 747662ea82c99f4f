"""
Vectorized color space conversion functions.

All functions operate on channel-first arrays: three color channels on
axis 0 and any trailing shape, typically (3, H, W). Results are float32.
Math runs in float64 under np.errstate so malformed pixels (NaN, inf)
only poison themselves and never raise or warn.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from hsplab.color.luma import LUMA_WEIGHTS, LumaWeights
from hsplab.color.sectors import (
    ROLE_INDEX,
    np_classify_rgb,
    np_sector_from_hue,
    np_sector_position,
)


def _as_channels(data: NDArray, name: str) -> NDArray[np.float64]:
    """Validate a channel-first array with at least three channels."""
    arr = np.asarray(data, dtype=np.float64)
    if arr.ndim < 1 or arr.shape[0] < 3:
        raise ValueError(
            f"{name} data must have at least 3 channels on axis 0, got shape {arr.shape}"
        )
    return arr


def _gather(channels: NDArray, index: NDArray[np.intp]) -> NDArray:
    """Pick, per pixel, the channel named by index."""
    return np.take_along_axis(channels, index[np.newaxis], axis=0)[0]


# =============================================================================
# RGB <-> HSP
# =============================================================================

def np_rgb_to_hsp(
    rgb: NDArray,
    weights: LumaWeights = LUMA_WEIGHTS,
    clamp: bool = False,
) -> NDArray[np.float32]:
    """
    Convert RGB to HSP (Hue, Saturation, Perceived brightness).

    Args:
        rgb: Array with R, G, B on axis 0
        weights: Luma weights for the brightness term
        clamp: Clip RGB to [0, 1] before converting

    Returns:
        Array of the same shape as the first three channels, holding H, S, P
    """
    rgb = _as_channels(rgb, "RGB")[:3]
    if clamp:
        rgb = np.clip(rgb, 0.0, 1.0)
    r, g, b = rgb[0], rgb[1], rgb[2]
    w = weights.as_array()

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        brightness = np.sqrt(w[0] * r * r + w[1] * g * g + w[2] * b * b)

        sector = np_classify_rgb(r, g, b)
        roles = ROLE_INDEX[sector]
        hi = _gather(rgb, roles[..., 0])
        mid = _gather(rgb, roles[..., 1])
        lo = _gather(rgb, roles[..., 2])

        # Grey pixels have no hue; NaN pixels keep their NaN
        delta = hi - lo
        achromatic = delta == 0
        x = np.where(achromatic, 0.0, (mid - lo) / np.where(achromatic, 1.0, delta))

        odd = (sector & 1) == 1
        hue = np.where(odd, (sector + 1 - x) / 6.0, (sector + x) / 6.0)
        hue = np.where(hue >= 1.0, hue - 1.0, hue)
        hue = np.where(achromatic, 0.0, hue)

        saturation = np.where(hi == 0, 0.0, 1.0 - lo / np.where(hi == 0, 1.0, hi))
        saturation = np.where(achromatic, 0.0, saturation)

    hsp = np.stack([hue, saturation, brightness], axis=0).astype(np.float32)
    # float32 rounding can turn a hue just below 1 into 1
    hsp[0] = np.where(hsp[0] >= 1.0, 0.0, hsp[0])
    return hsp


def np_hsp_to_rgb(
    hsp: NDArray,
    weights: LumaWeights = LUMA_WEIGHTS,
    clamp: bool = False,
) -> NDArray[np.float32]:
    """
    Convert HSP back to RGB.

    Pixels with saturation below 1 invert the brightness equation for the
    sector's min channel; fully saturated pixels (1 - s <= 0) get a zero
    min channel and solve for max and mid directly.

    Args:
        hsp: Array with H, S, P on axis 0
        weights: Luma weights for the brightness term
        clamp: Wrap hue into [0, 1) and clip saturation to [0, 1] first

    Returns:
        Array of the same shape as the first three channels, holding R, G, B
    """
    hsp = _as_channels(hsp, "HSP")[:3]
    h, s, p = hsp[0], hsp[1], hsp[2]
    if clamp:
        h = np.where(np.isfinite(h), np.mod(h, 1.0), 0.0)
        s = np.clip(s, 0.0, 1.0)
    w = weights.as_array()

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        sector = np_sector_from_hue(h)
        x = np_sector_position(sector, h)
        roles = ROLE_INDEX[sector]
        w_max = w[roles[..., 0]]
        w_mid = w[roles[..., 1]]
        w_min = w[roles[..., 2]]

        min_over_max = 1.0 - s
        chromatic = min_over_max > 0
        safe_mom = np.where(chromatic, min_over_max, 1.0)

        # Chromatic branch
        part = 1.0 + x * (1.0 / safe_mom - 1.0)
        lo = p / np.sqrt(w_max / safe_mom / safe_mom + w_mid * part * part + w_min)
        hi = lo / safe_mom
        mid = lo + x * (hi - lo)

        # Fully saturated branch
        hi_sat = np.sqrt(p * p / (w_max + w_mid * x * x))
        mid_sat = hi_sat * x

        hi = np.where(chromatic, hi, hi_sat)
        mid = np.where(chromatic, mid, mid_sat)
        lo = np.where(chromatic, lo, 0.0)

    rgb = np.empty((3,) + np.shape(h), dtype=np.float64)
    np.put_along_axis(rgb, roles[..., 0][np.newaxis], hi[np.newaxis], axis=0)
    np.put_along_axis(rgb, roles[..., 1][np.newaxis], mid[np.newaxis], axis=0)
    np.put_along_axis(rgb, roles[..., 2][np.newaxis], lo[np.newaxis], axis=0)

    return rgb.astype(np.float32)


# =============================================================================
# Conversion dispatch
# =============================================================================

def _identity(data: NDArray) -> NDArray:
    return np.asarray(data, dtype=np.float32)


# All conversion functions: (to_rgb, from_rgb)
COLORSPACE_CONVERTERS = {
    "RGB": (_identity, _identity),
    "HSP": (np_hsp_to_rgb, np_rgb_to_hsp),
}


def convert_colorspace(
    data: NDArray,
    from_space: str,
    to_space: str,
) -> NDArray[np.float32]:
    """
    Convert image data between color spaces.

    Only the first three channels are converted. Any further channels
    (alpha) are copied through unchanged.

    Args:
        data: Image data in CHW format
        from_space: Source color space name
        to_space: Target color space name

    Returns:
        Converted image data
    """
    from_space = str(getattr(from_space, "value", from_space)).upper()
    to_space = str(getattr(to_space, "value", to_space)).upper()

    if from_space not in COLORSPACE_CONVERTERS:
        raise ValueError(f"Unknown source colorspace: {from_space}")
    if to_space not in COLORSPACE_CONVERTERS:
        raise ValueError(f"Unknown target colorspace: {to_space}")

    data = np.asarray(data)
    if from_space == to_space:
        return data.astype(np.float32, copy=True)

    to_rgb_func, _ = COLORSPACE_CONVERTERS[from_space]
    _, from_rgb_func = COLORSPACE_CONVERTERS[to_space]

    # Convert via RGB
    color = from_rgb_func(to_rgb_func(data[:3]))

    if data.shape[0] > 3:
        extra = data[3:].astype(np.float32)
        return np.concatenate([color, extra], axis=0)
    return color


def list_colorspaces() -> list[str]:
    """Get list of supported color spaces."""
    return sorted(COLORSPACE_CONVERTERS)
