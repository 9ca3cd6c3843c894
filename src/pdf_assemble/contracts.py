from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from contracts.raster import EncodedRaster


class PdfAssemblyEngineName(str, Enum):
    """
    PDF serialization backend identifiers.
    """

    PYPDFIUM2 = "pypdfium2"


@dataclass(frozen=True, slots=True)
class ImagePlacement:
    # PDF user space: origin bottom-left, 1 unit == 1 source pixel (no DPI conversion)
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class PdfPageSpec:
    width: float
    height: float
    image: EncodedRaster
    placement: ImagePlacement


@dataclass(frozen=True, slots=True)
class PdfDocumentSpec:
    pages: tuple[PdfPageSpec, ...]


@dataclass(frozen=True, slots=True)
class AssembledPdf:
    data: bytes
    page_width: float
    page_height: float
    backend: dict[str, Any] = field(default_factory=dict)
