"""
Tone mapping stage (per-pixel, fixed policy).

- gray = (R + G + B) / 3 from the pixel's original values
- gray > 240: R = G = B = 255 (highlight flattening)
- otherwise: each of R, G, B -> min(255, round(channel * 1.2)) (contrast boost)
- alpha and any further channel pass through unchanged
"""

from .contracts import CONTRAST_FACTOR, HIGHLIGHT_THRESHOLD, WHITE, ToneDecision, ToneMapStats
from .module import apply_tone_map, classify_gray, map_pixel

__all__ = [
    "CONTRAST_FACTOR",
    "HIGHLIGHT_THRESHOLD",
    "WHITE",
    "ToneDecision",
    "ToneMapStats",
    "apply_tone_map",
    "classify_gray",
    "map_pixel",
]
