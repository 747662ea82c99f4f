"""
hsplab - per-pixel RGB <-> HSP color transforms.

HSP is Hue, Saturation, Perceived brightness: an HSV-like model whose
brightness is the luma-weighted quadratic mean of the channels.
"""

__version__ = "0.1.0"

from hsplab.color.hsp import HSP, RGB, hsp_to_rgb, rgb_to_hsp
from hsplab.color.luma import LUMA_WEIGHTS, LumaWeights

__all__ = [
    "__version__",
    "HSP",
    "RGB",
    "LUMA_WEIGHTS",
    "LumaWeights",
    "hsp_to_rgb",
    "rgb_to_hsp",
]
