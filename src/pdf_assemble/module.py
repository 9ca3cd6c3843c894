from __future__ import annotations

from contracts.raster import EncodedRaster, EncodingError, RasterFormat

from .contracts import AssembledPdf, ImagePlacement, PdfAssemblyEngineName, PdfDocumentSpec, PdfPageSpec
from .engines import Pypdfium2Engine

_JPEG_SOI = b"\xff\xd8"
_JPEG_EOI = b"\xff\xd9"


def _get_engine(engine: PdfAssemblyEngineName):
    if engine == PdfAssemblyEngineName.PYPDFIUM2:
        return Pypdfium2Engine()
    raise ValueError(f"Unsupported PDF assembly engine: {engine}")


def _check_embeddable(raster: EncodedRaster) -> None:
    if not raster.data:
        raise EncodingError("Encoded raster is empty")
    if raster.format != RasterFormat.JPEG:
        raise EncodingError(f"Unsupported raster format for PDF embedding: {raster.format!r}")
    if not raster.data.startswith(_JPEG_SOI):
        raise EncodingError("Raster is tagged JPEG but lacks a JPEG start-of-image marker")
    if not raster.data.endswith(_JPEG_EOI):
        raise EncodingError("JPEG data is truncated: no end-of-image marker")


def build_document_spec(raster: EncodedRaster) -> PdfDocumentSpec:
    """
    One page exactly the image's pixel size, the image drawn 1:1 at the origin.
    """

    width = float(raster.width)
    height = float(raster.height)
    page = PdfPageSpec(
        width=width,
        height=height,
        image=raster,
        placement=ImagePlacement(x=0.0, y=0.0, width=width, height=height),
    )
    return PdfDocumentSpec(pages=(page,))


def validate_document_spec(spec: PdfDocumentSpec) -> None:
    """
    Enforce single-page/single-image topology with page size == image size.
    """

    if len(spec.pages) != 1:
        raise EncodingError(f"Expected exactly one page, got {len(spec.pages)}")

    page = spec.pages[0]
    if (page.width, page.height) != (float(page.image.width), float(page.image.height)):
        raise EncodingError(
            f"Page size {page.width}x{page.height} does not match image size "
            f"{page.image.width}x{page.image.height}"
        )

    p = page.placement
    if (p.x, p.y, p.width, p.height) != (0.0, 0.0, page.width, page.height):
        raise EncodingError("Image placement must start at the page origin and fill the page")


def assemble_image_pdf(
    raster: EncodedRaster,
    *,
    engine: PdfAssemblyEngineName = PdfAssemblyEngineName.PYPDFIUM2,
) -> AssembledPdf:
    """
    Wrap one JPEG raster as the sole content of a single-page PDF.

    Raises EncodingError for an empty, non-JPEG or truncated raster (missing
    SOI/EOI markers), or when the backend fails for any reason.
    """

    _check_embeddable(raster)
    spec = build_document_spec(raster)
    validate_document_spec(spec)

    backend = _get_engine(engine)
    try:
        data = backend.serialize(spec=spec)
    except EncodingError:
        raise
    except Exception as e:
        raise EncodingError(f"PDF backend {backend.backend_id()} failed: {e!r}") from e

    page = spec.pages[0]
    return AssembledPdf(
        data=data,
        page_width=page.width,
        page_height=page.height,
        backend={"backend": backend.backend_id(), "backend_version": backend.backend_version()},
    )
