"""RGB <-> HSP conversion math, scalar and vectorized."""

from hsplab.color.conversions import (
    convert_colorspace,
    list_colorspaces,
    np_hsp_to_rgb,
    np_rgb_to_hsp,
)
from hsplab.color.hsp import HSP, RGB, hsp_to_rgb, hspa_to_rgba, rgb_to_hsp, rgba_to_hspa
from hsplab.color.luma import LUMA_WEIGHTS, LumaWeights
from hsplab.color.sectors import Channel, HueSector

__all__ = [
    "HSP",
    "RGB",
    "LUMA_WEIGHTS",
    "LumaWeights",
    "Channel",
    "HueSector",
    "rgb_to_hsp",
    "hsp_to_rgb",
    "rgba_to_hspa",
    "hspa_to_rgba",
    "np_rgb_to_hsp",
    "np_hsp_to_rgb",
    "convert_colorspace",
    "list_colorspaces",
]
