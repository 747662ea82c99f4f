"""Built-in nodes. Importing this package registers them."""

from hsplab.nodes.color import HSPAdjustNode, HSPToRGBNode, RGBToHSPNode

__all__ = [
    "RGBToHSPNode",
    "HSPToRGBNode",
    "HSPAdjustNode",
]
