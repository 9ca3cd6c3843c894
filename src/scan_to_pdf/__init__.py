"""
Scan cleanup pipeline: one image in, one single-page PDF out.

read -> decode (`raster_io`) -> tone map (`tone_map`) -> JPEG encode (`raster_io`)
-> PDF assembly (`pdf_assemble`) -> atomic write of `<stem>_processed.pdf`.

Every failure is fatal to the run and is reported through `ScanToPdfResult`;
the CLI maps `ok=False` to exit code 1.
"""

from .contracts import ScanToPdfConfig, ScanToPdfError, ScanToPdfErrorCode, ScanToPdfResult
from .data_access import derive_output_path
from .module import run_scan_to_pdf

__all__ = [
    "ScanToPdfConfig",
    "ScanToPdfError",
    "ScanToPdfErrorCode",
    "ScanToPdfResult",
    "derive_output_path",
    "run_scan_to_pdf",
]
