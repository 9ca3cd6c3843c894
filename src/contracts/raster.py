from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np


class RasterStageError(Exception):
    """
    Base class for failures raised by raster stages (decode, encode, assemble).

    Stages raise; only the pipeline driver converts these into result errors.
    """


class DecodeError(RasterStageError):
    pass


class EncodingError(RasterStageError):
    pass


class RasterFormat(str, Enum):
    JPEG = "jpeg"


@dataclass(frozen=True, slots=True, eq=False)
class PixelBuffer:
    """
    Decoded pixels, row-major and channel-interleaved.

    `data` has shape (height, width, channels), dtype uint8, C-contiguous.
    The first three channels are R, G, B; any further channel (alpha) is
    carried through untouched by every stage.

    The dataclass is frozen but `data` is not: stages that rewrite pixels do
    so in place.
    """

    width: int
    height: int
    channels: int
    data: np.ndarray

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be positive")
        if self.channels < 3:
            raise ValueError("PixelBuffer needs at least R, G, B channels")
        if not isinstance(self.data, np.ndarray):
            raise TypeError("data must be a numpy.ndarray")
        if self.data.dtype != np.uint8:
            raise TypeError(f"data must be uint8, got {self.data.dtype}")
        if self.data.shape != (self.height, self.width, self.channels):
            raise ValueError(
                f"data shape {self.data.shape} does not match "
                f"(height, width, channels)=({self.height}, {self.width}, {self.channels})"
            )
        if not self.data.flags.c_contiguous:
            raise ValueError("data must be C-contiguous")

    @property
    def sample_count(self) -> int:
        return self.width * self.height * self.channels

    def offset(self, x: int, y: int, c: int) -> int:
        """Flat index of channel `c` of pixel (x, y)."""
        return (y * self.width + x) * self.channels + c

    def samples(self) -> np.ndarray:
        """Flat view over all samples (no copy)."""
        return self.data.reshape(-1)

    @staticmethod
    def from_samples(*, width: int, height: int, channels: int, samples: bytes | bytearray) -> "PixelBuffer":
        arr = np.frombuffer(bytes(samples), dtype=np.uint8)
        if arr.size != width * height * channels:
            raise ValueError(
                f"expected {width * height * channels} samples for {width}x{height}x{channels}, got {arr.size}"
            )
        return PixelBuffer(
            width=width,
            height=height,
            channels=channels,
            data=arr.reshape(height, width, channels).copy(),
        )


@dataclass(frozen=True, slots=True)
class EncodedRaster:
    """
    Compressed raster bytes plus the pixel dimensions they decode to.
    """

    data: bytes
    format: RasterFormat
    width: int
    height: int

    def __post_init__(self) -> None:
        if not isinstance(self.data, bytes):
            raise TypeError("data must be bytes")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be positive")
