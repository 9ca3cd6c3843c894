from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

# Fixed policy constants (0..255 scale). Not configurable.
HIGHLIGHT_THRESHOLD = 240.0  # gray strictly above this is flattened to white
CONTRAST_FACTOR = 1.2
WHITE = 255


class ToneDecision(str, Enum):
    HIGHLIGHT = "highlight"
    NORMAL = "normal"


@dataclass(frozen=True, slots=True)
class ToneMapStats:
    width: int
    height: int
    highlight_pixels: int
    contrast_pixels: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
