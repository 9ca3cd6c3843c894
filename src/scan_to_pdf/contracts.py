from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from pdf_assemble.contracts import PdfAssemblyEngineName
from raster_io import DEFAULT_JPEG_QUALITY


class ScanToPdfErrorCode(str, Enum):
    MISSING_ARGUMENT = "SCAN_MISSING_ARGUMENT"
    INPUT_NOT_FOUND = "SCAN_INPUT_NOT_FOUND"
    DECODE_ERROR = "SCAN_DECODE_ERROR"
    ENCODING_ERROR = "SCAN_ENCODING_ERROR"
    WRITE_ERROR = "SCAN_WRITE_ERROR"


@dataclass(frozen=True, slots=True)
class ScanToPdfError:
    code: str
    stage: str  # args | read | decode | tone_map | encode | assemble | write
    message: str
    detail: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class ScanToPdfResult:
    """
    Outcome of one run: success with `output_path`, or `ok=False` with the
    fatal error in `errors`. Nothing is written on failure.
    """

    ok: bool
    source_path: str | None
    output_path: str | None
    page: dict[str, int] | None  # {"width_px": int, "height_px": int}
    errors: list[ScanToPdfError]
    meta: dict[str, Any]

    @property
    def error(self) -> ScanToPdfError | None:
        return self.errors[0] if self.errors else None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ScanToPdfConfig:
    """
    Pipeline configuration.

    - explicit defaults, no environment variable reads
    - tone policy constants live in `tone_map` and are not configurable
    """

    output_suffix: str = "_processed"
    output_extension: str = ".pdf"
    jpeg_quality: int = DEFAULT_JPEG_QUALITY
    engine: PdfAssemblyEngineName = PdfAssemblyEngineName.PYPDFIUM2
    compute_source_sha256: bool = False

    def __post_init__(self) -> None:
        if not 1 <= self.jpeg_quality <= 100:
            raise ValueError("jpeg_quality must be within [1, 100]")
        if not self.output_extension.startswith("."):
            raise ValueError("output_extension must start with '.'")
        if "/" in self.output_suffix or "\\" in self.output_suffix:
            raise ValueError("output_suffix must not contain path separators")
