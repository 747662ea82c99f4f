"""
Image data passed between nodes.

An ImageBuffer is a float32 (C, H, W) array tagged with the colorspace of
its first three channels. A fourth channel is alpha; color transforms
replace the color channels through with_color() and never touch alpha.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import NDArray

COLOR_CHANNELS = 3
ALPHA_INDEX = 3


class ColorSpace(str, Enum):
    """Colorspace tags for the color channels."""

    RGB = "RGB"
    HSP = "HSP"


@dataclass
class ImageBuffer:
    """
    Multi-channel float32 image.

    Attributes:
        data: float32 array of shape (C, H, W); a 2D array becomes one channel
        colorspace: Tag of the first three channels
        metadata: Free-form values carried along with the pixels
    """

    data: NDArray[np.float32]
    colorspace: ColorSpace | str = ColorSpace.RGB
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.data = np.asarray(self.data, dtype=np.float32)

        if self.data.ndim == 2:
            self.data = self.data[np.newaxis]
        elif self.data.ndim != 3:
            raise ValueError(f"ImageBuffer data must be 2D or 3D, got {self.data.ndim}D")

        if isinstance(self.colorspace, str) and not isinstance(self.colorspace, ColorSpace):
            try:
                self.colorspace = ColorSpace(self.colorspace.upper())
            except ValueError:
                # Unknown tags are kept verbatim
                pass

    @property
    def channels(self) -> int:
        return self.data.shape[0]

    @property
    def height(self) -> int:
        return self.data.shape[1]

    @property
    def width(self) -> int:
        return self.data.shape[2]

    @property
    def shape(self) -> tuple[int, int, int]:
        return self.data.shape  # type: ignore

    @property
    def has_alpha(self) -> bool:
        """True when a channel follows the three color channels."""
        return self.channels > ALPHA_INDEX

    @property
    def color(self) -> NDArray[np.float32]:
        """View of the first three channels."""
        if self.channels < COLOR_CHANNELS:
            raise ValueError(
                f"Color data needs {COLOR_CHANNELS} channels, buffer has {self.channels}"
            )
        return self.data[:COLOR_CHANNELS]

    @property
    def alpha(self) -> NDArray[np.float32] | None:
        """View of the alpha channel, or None."""
        if not self.has_alpha:
            return None
        return self.data[ALPHA_INDEX]

    def with_color(
        self,
        color: NDArray,
        colorspace: ColorSpace | str | None = None,
    ) -> ImageBuffer:
        """
        Build a new buffer from replacement color channels.

        Channels past the third are copied unchanged, metadata is deep-copied
        and this buffer is left as it was.

        Args:
            color: New (3, H, W) color data
            colorspace: Tag of the new buffer (defaults to this one's)

        Raises:
            ValueError: If color does not match the buffer's height and width
        """
        color = np.asarray(color, dtype=np.float32)
        if color.shape != (COLOR_CHANNELS,) + self.data.shape[1:]:
            raise ValueError(
                f"Color shape {color.shape} does not match buffer {self.shape}"
            )

        if self.has_alpha:
            data = np.concatenate([color, self.data[COLOR_CHANNELS:]], axis=0)
        else:
            data = color.copy()

        return ImageBuffer(
            data=data,
            colorspace=self.colorspace if colorspace is None else colorspace,
            metadata=copy.deepcopy(self.metadata),
        )

    def copy(self) -> ImageBuffer:
        """Deep copy."""
        return ImageBuffer(
            data=self.data.copy(),
            colorspace=self.colorspace,
            metadata=copy.deepcopy(self.metadata),
        )

    def __repr__(self) -> str:
        return (
            f"ImageBuffer(shape={self.shape}, colorspace={self.colorspace}, "
            f"alpha={self.has_alpha})"
        )
