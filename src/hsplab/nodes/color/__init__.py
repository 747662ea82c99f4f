"""Color space nodes."""

from hsplab.nodes.color.hsp_nodes import HSPAdjustNode, HSPToRGBNode, RGBToHSPNode

__all__ = [
    "RGBToHSPNode",
    "HSPToRGBNode",
    "HSPAdjustNode",
]
