"""
Canonical, authoritative pipeline contracts.

These models are the schema boundary between stages:
- `raster_io` produces `PixelBuffer` and `EncodedRaster`
- `tone_map` rewrites a `PixelBuffer` in place
- `pdf_assemble` consumes an `EncodedRaster`

Stage code should consume/produce these contract objects (not ad-hoc arrays or dicts).
"""

from .raster import (
    DecodeError,
    EncodedRaster,
    EncodingError,
    PixelBuffer,
    RasterFormat,
    RasterStageError,
)

__all__ = [
    "DecodeError",
    "EncodedRaster",
    "EncodingError",
    "PixelBuffer",
    "RasterFormat",
    "RasterStageError",
]
