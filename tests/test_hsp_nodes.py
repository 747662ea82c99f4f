"""
Tests for the HSP color nodes.
"""

import logging

import numpy as np
import pytest

from hsplab.color.conversions import np_rgb_to_hsp
from hsplab.core.data_types import ColorSpace, ImageBuffer
from hsplab.core.port import connect
from hsplab.nodes import HSPAdjustNode, HSPToRGBNode, RGBToHSPNode


@pytest.fixture
def rgba_buffer():
    """Random RGBA image in [0, 1]."""
    data = np.random.default_rng(7).random((4, 16, 16)).astype(np.float32)
    return ImageBuffer(data, colorspace=ColorSpace.RGB)


def run(node, buffer):
    """Feed a buffer into a node and return its output."""
    node.inputs["image"].default = buffer
    assert node.execute(), node.last_error
    return node.outputs["image"].get_value()


class TestConversionNodes:
    """RGB To HSP and HSP To RGB."""

    def test_rgb_to_hsp(self, rgba_buffer):
        """Output holds HSP color and the untouched alpha."""
        result = run(RGBToHSPNode(), rgba_buffer)

        assert result.colorspace == ColorSpace.HSP
        assert result.shape == rgba_buffer.shape
        np.testing.assert_array_equal(result.color, np_rgb_to_hsp(rgba_buffer.color))
        np.testing.assert_array_equal(result.alpha, rgba_buffer.alpha)

    def test_round_trip_through_ports(self, rgba_buffer):
        """Two connected nodes give back the input."""
        to_hsp, to_rgb = RGBToHSPNode(), HSPToRGBNode()
        to_hsp.inputs["image"].default = rgba_buffer
        connect(to_hsp.outputs["image"], to_rgb.inputs["image"])

        assert to_hsp.execute()
        assert to_rgb.execute()
        result = to_rgb.outputs["image"].get_value()

        assert result.colorspace == ColorSpace.RGB
        np.testing.assert_allclose(result.color, rgba_buffer.color, atol=1e-4)
        np.testing.assert_array_equal(result.alpha, rgba_buffer.alpha)

    def test_input_not_modified(self, rgba_buffer):
        """The incoming buffer is left alone."""
        before = rgba_buffer.data.copy()
        run(RGBToHSPNode(), rgba_buffer)

        np.testing.assert_array_equal(rgba_buffer.data, before)

    def test_clamp_parameter(self):
        """clamp=True wraps hue and clips saturation before inverting."""
        hsp = np.zeros((3, 1, 1), dtype=np.float32)
        hsp[:, 0, 0] = [1.25, 1.5, 0.5]
        node = HSPToRGBNode()
        node.set_parameter("clamp", True)

        clamped = run(node, ImageBuffer(hsp, colorspace=ColorSpace.HSP))

        expected = hsp.copy()
        expected[:, 0, 0] = [0.25, 1.0, 0.5]
        reference = run(HSPToRGBNode(), ImageBuffer(expected, colorspace=ColorSpace.HSP))
        np.testing.assert_allclose(clamped.data, reference.data, atol=1e-6)

    def test_missing_input(self):
        """No image means failure with a clear error."""
        node = RGBToHSPNode()

        assert not node.execute()
        assert "image" in node.last_error

    def test_too_few_channels(self):
        """Two-channel input is rejected."""
        node = RGBToHSPNode()
        node.inputs["image"].default = ImageBuffer(np.zeros((2, 4, 4)))

        assert not node.execute()
        assert node.last_error == "Need at least 3 channels, got 2"

    def test_colorspace_mismatch_warns(self, rgba_buffer, caplog):
        """Feeding RGB into HSP To RGB converts anyway but logs a warning."""
        node = HSPToRGBNode()

        with caplog.at_level(logging.WARNING, logger="hsplab.nodes.color.hsp_nodes"):
            run(node, rgba_buffer)

        assert "expected HSP input" in caplog.text


class TestAdjustNode:
    """HSP Adjust."""

    @pytest.fixture
    def rgb_buffer(self):
        data = np.random.default_rng(3).random((3, 12, 12)).astype(np.float32)
        return ImageBuffer(data)

    def test_defaults_are_identity(self, rgb_buffer):
        """Default parameters return the input."""
        result = run(HSPAdjustNode(), rgb_buffer)

        np.testing.assert_allclose(result.data, rgb_buffer.data, atol=1e-4)

    def test_full_turn_is_identity(self, rgb_buffer):
        """A hue shift of one full turn changes nothing."""
        node = HSPAdjustNode()
        node.set_parameter("hue_shift", 1.0)

        result = run(node, rgb_buffer)

        np.testing.assert_allclose(result.data, rgb_buffer.data, atol=1e-4)

    def test_desaturate(self, rgb_buffer):
        """Zero saturation gives grey at the original perceived brightness."""
        node = HSPAdjustNode()
        node.set_parameter("saturation", 0.0)

        result = run(node, rgb_buffer)
        brightness = np_rgb_to_hsp(rgb_buffer.color)[2]

        for channel in result.color:
            np.testing.assert_allclose(channel, brightness, atol=1e-5)

    def test_brightness_scales_linearly(self, rgb_buffer):
        """P is homogeneous, so doubling it doubles every channel."""
        node = HSPAdjustNode()
        node.set_parameter("brightness", 2.0)

        result = run(node, rgb_buffer)

        np.testing.assert_allclose(result.data, rgb_buffer.data * 2, atol=1e-4)

    def test_clip_output(self, rgb_buffer):
        """clip_output keeps results in [0, 1]."""
        node = HSPAdjustNode()
        node.set_parameter("brightness", 3.0)
        node.set_parameter("clip_output", True)

        result = run(node, rgb_buffer)

        assert result.data.min() >= 0.0
        assert result.data.max() <= 1.0

    def test_alpha_preserved(self, rgba_buffer):
        """Alpha is copied even through an adjustment."""
        node = HSPAdjustNode()
        node.set_parameter("hue_shift", 0.3)

        result = run(node, rgba_buffer)

        np.testing.assert_array_equal(result.alpha, rgba_buffer.alpha)

    def test_parameter_ranges(self):
        """Out-of-range settings clamp to the declared limits."""
        node = HSPAdjustNode()
        node.set_parameter("saturation", 10.0)
        node.set_parameter("hue_shift", -3.0)

        assert node.get_parameter("saturation") == 4.0
        assert node.get_parameter("hue_shift") == -1.0
