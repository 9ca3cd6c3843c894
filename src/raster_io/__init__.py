"""
Raster codec stage (decode/encode only, backed by Pillow).

- Decode: encoded image bytes -> RGBA `PixelBuffer`
- Encode: `PixelBuffer` -> JPEG `EncodedRaster`
- Performs NO pixel adjustments; tone changes belong to `tone_map`.
"""

from .module import DEFAULT_JPEG_QUALITY, decode_raster, encode_raster

__all__ = ["DEFAULT_JPEG_QUALITY", "decode_raster", "encode_raster"]
