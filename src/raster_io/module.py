from __future__ import annotations

import io

import numpy as np
from PIL import Image

from contracts.raster import DecodeError, EncodedRaster, EncodingError, PixelBuffer, RasterFormat

DEFAULT_JPEG_QUALITY = 95

# Pillow raises a mix of these for unreadable input depending on the plugin.
_PIL_DECODE_ERRORS = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)


def decode_raster(data: bytes) -> PixelBuffer:
    """
    Decode an encoded image into an RGBA PixelBuffer.

    Any layout Pillow can open (RGB, palette, grayscale, CMYK, ...) is
    converted to RGBA; images without transparency get an opaque alpha.
    """

    if not data:
        raise DecodeError("Input image is empty")

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            source_mode = img.mode
            rgba = img.convert("RGBA")
    except _PIL_DECODE_ERRORS as e:
        raise DecodeError(f"Unable to decode input image: {e}") from e

    pixels = np.array(rgba, dtype=np.uint8)
    height, width = pixels.shape[:2]
    if width == 0 or height == 0:
        raise DecodeError(f"Decoded image has no pixels (source mode {source_mode})")

    return PixelBuffer(width=width, height=height, channels=4, data=np.ascontiguousarray(pixels))


def encode_raster(buffer: PixelBuffer, *, quality: int = DEFAULT_JPEG_QUALITY) -> EncodedRaster:
    """
    Re-encode the RGB planes of `buffer` as a baseline JPEG.

    JPEG carries no alpha, so channels past the third are dropped here.
    """

    rgb = np.ascontiguousarray(buffer.data[:, :, :3])
    out = io.BytesIO()
    try:
        Image.fromarray(rgb).save(out, format="JPEG", quality=quality)
    except (OSError, ValueError) as e:
        raise EncodingError(f"JPEG encoding failed: {e}") from e

    return EncodedRaster(
        data=out.getvalue(),
        format=RasterFormat.JPEG,
        width=buffer.width,
        height=buffer.height,
    )
