"""
PDF assembly stage (single JPEG raster -> single-page PDF bytes).

- One page sized exactly to the image's pixel dimensions (1 px == 1 PDF unit)
- One image object, embedded as-is (DCTDecode), drawn at the origin filling the page
- No annotations, metadata or extra content streams
"""

from .contracts import AssembledPdf, ImagePlacement, PdfAssemblyEngineName, PdfDocumentSpec, PdfPageSpec
from .module import assemble_image_pdf, build_document_spec, validate_document_spec

__all__ = [
    "AssembledPdf",
    "ImagePlacement",
    "PdfAssemblyEngineName",
    "PdfDocumentSpec",
    "PdfPageSpec",
    "assemble_image_pdf",
    "build_document_spec",
    "validate_document_spec",
]
