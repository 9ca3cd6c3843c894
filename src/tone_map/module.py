from __future__ import annotations

import numpy as np

from contracts.raster import PixelBuffer

from .contracts import CONTRAST_FACTOR, HIGHLIGHT_THRESHOLD, WHITE, ToneDecision, ToneMapStats


def classify_gray(gray: float) -> ToneDecision:
    """
    Highlight iff strictly above the threshold; 240 itself is NORMAL.
    """
    return ToneDecision.HIGHLIGHT if gray > HIGHLIGHT_THRESHOLD else ToneDecision.NORMAL


def _boost(channel: int) -> int:
    return int(min(WHITE, round(channel * CONTRAST_FACTOR)))


def map_pixel(r: int, g: int, b: int) -> tuple[int, int, int]:
    """
    Scalar form of the tone rule for a single pixel.
    """

    gray = (r + g + b) / 3.0
    if classify_gray(gray) is ToneDecision.HIGHLIGHT:
        return WHITE, WHITE, WHITE
    return _boost(r), _boost(g), _boost(b)


def apply_tone_map(buffer: PixelBuffer) -> ToneMapStats:
    """
    Rewrite the RGB channels of `buffer` in place.

    Both the classification and the boosted values are computed from a
    snapshot of the RGB planes before anything is written back, so every
    pixel is judged on its pre-transform values. Channels past the third
    are not touched.

    Not idempotent: run once per image.
    """

    rgb = buffer.data[:, :, :3]
    original = rgb.astype(np.float64)

    gray = original.sum(axis=2) / 3.0
    highlight = gray > HIGHLIGHT_THRESHOLD

    # round-then-clamp; channel * 1.2 never lands on .5 for integer input
    boosted = np.minimum(float(WHITE), np.rint(original * CONTRAST_FACTOR))
    mapped = np.where(highlight[:, :, np.newaxis], float(WHITE), boosted)

    rgb[...] = mapped.astype(np.uint8)

    highlight_pixels = int(np.count_nonzero(highlight))
    return ToneMapStats(
        width=buffer.width,
        height=buffer.height,
        highlight_pixels=highlight_pixels,
        contrast_pixels=buffer.width * buffer.height - highlight_pixels,
    )
