"""
HSP conversion nodes.

RGB To HSP and HSP To RGB convert the color channels of an image pixel by
pixel; alpha rides along unchanged. HSP Adjust edits hue, saturation and
perceived brightness of an RGB image through an HSP round trip.
"""

import logging

import numpy as np

from hsplab.color.conversions import np_hsp_to_rgb, np_rgb_to_hsp
from hsplab.core.data_types import ColorSpace, ImageBuffer
from hsplab.core.node import Node, ParameterType
from hsplab.core.port import PortType
from hsplab.core.registry import register_node

logger = logging.getLogger(__name__)


def _check_colorspace(node: Node, buffer: ImageBuffer, expected: ColorSpace) -> None:
    """Warn when the input tag doesn't match; the data is converted anyway."""
    if buffer.colorspace != expected:
        logger.warning(
            "%s: expected %s input, got %s", node.id, expected.value, buffer.colorspace
        )


class _HSPConversionNode(Node):
    """Shared ports and parameters for the two conversion directions."""

    category = "Color"
    icon = "palette"

    def define_ports(self) -> None:
        """Define ports."""
        self.add_input(
            "image",
            port_type=PortType.IMAGE,
            description="Input image (3 or 4 channels)",
            required=True,
        )
        self.add_output(
            "image",
            port_type=PortType.IMAGE,
            description="Converted image, alpha unchanged",
        )

    def define_parameters(self) -> None:
        """Define conversion parameters."""
        self.add_parameter(
            "clamp",
            param_type=ParameterType.BOOL,
            default=False,
            description="Clamp input values to their nominal range first",
        )

    def _input_buffer(self) -> ImageBuffer:
        buffer: ImageBuffer = self.get_input_value("image")

        if buffer is None:
            raise ValueError("No input image")
        if buffer.channels < 3:
            raise ValueError(f"Need at least 3 channels, got {buffer.channels}")

        return buffer


@register_node
class RGBToHSPNode(_HSPConversionNode):
    """
    Convert an RGB image to HSP.

    Output channels are hue, saturation and perceived brightness.
    """

    name = "RGB To HSP"
    description = "Convert RGB to Hue / Saturation / Perceived brightness"
    _abstract = False

    def process(self) -> None:
        """Convert the color channels."""
        buffer = self._input_buffer()
        _check_colorspace(self, buffer, ColorSpace.RGB)

        hsp = np_rgb_to_hsp(buffer.color, clamp=self.get_parameter("clamp"))
        self.set_output_value("image", buffer.with_color(hsp, ColorSpace.HSP))


@register_node
class HSPToRGBNode(_HSPConversionNode):
    """
    Convert an HSP image back to RGB.

    Inverts RGB To HSP exactly for images it produced.
    """

    name = "HSP To RGB"
    description = "Convert Hue / Saturation / Perceived brightness to RGB"
    _abstract = False

    def process(self) -> None:
        """Convert the color channels."""
        buffer = self._input_buffer()
        _check_colorspace(self, buffer, ColorSpace.HSP)

        rgb = np_hsp_to_rgb(buffer.color, clamp=self.get_parameter("clamp"))
        self.set_output_value("image", buffer.with_color(rgb, ColorSpace.RGB))


@register_node
class HSPAdjustNode(Node):
    """
    Adjust an RGB image in HSP space.

    Hue is rotated and wrapped, saturation is scaled and kept in [0, 1],
    perceived brightness is scaled. With default parameters the image
    comes back unchanged up to float precision.
    """

    name = "HSP Adjust"
    category = "Color"
    description = "Shift hue, scale saturation and perceived brightness"
    icon = "sliders"
    _abstract = False

    def define_ports(self) -> None:
        """Define ports."""
        self.add_input(
            "image",
            port_type=PortType.IMAGE,
            description="Input RGB image",
            required=True,
        )
        self.add_output(
            "image",
            port_type=PortType.IMAGE,
            description="Adjusted RGB image",
        )

    def define_parameters(self) -> None:
        """Define adjustment parameters."""
        self.add_parameter(
            "hue_shift",
            param_type=ParameterType.FLOAT,
            default=0.0,
            min_value=-1.0,
            max_value=1.0,
            step=0.01,
            description="Hue rotation as a fraction of a turn",
        )
        self.add_parameter(
            "saturation",
            param_type=ParameterType.FLOAT,
            default=1.0,
            min_value=0.0,
            max_value=4.0,
            step=0.01,
            description="Saturation multiplier",
        )
        self.add_parameter(
            "brightness",
            param_type=ParameterType.FLOAT,
            default=1.0,
            min_value=0.0,
            max_value=4.0,
            step=0.01,
            description="Perceived brightness multiplier",
        )
        self.add_parameter(
            "clip_output",
            param_type=ParameterType.BOOL,
            default=False,
            description="Clip resulting RGB to [0, 1]",
        )

    def process(self) -> None:
        """Apply the adjustment."""
        buffer: ImageBuffer = self.get_input_value("image")

        if buffer is None:
            raise ValueError("No input image")
        _check_colorspace(self, buffer, ColorSpace.RGB)

        hsp = np_rgb_to_hsp(buffer.color).astype(np.float64)

        hue_shift = self.get_parameter("hue_shift")
        if hue_shift:
            hsp[0] = np.mod(hsp[0] + hue_shift, 1.0)
        hsp[1] = np.clip(hsp[1] * self.get_parameter("saturation"), 0.0, 1.0)
        hsp[2] = hsp[2] * self.get_parameter("brightness")

        rgb = np_hsp_to_rgb(hsp)
        if self.get_parameter("clip_output"):
            rgb = np.clip(rgb, 0.0, 1.0)

        self.set_output_value("image", buffer.with_color(rgb, ColorSpace.RGB))
