from __future__ import annotations

import hashlib
import io
import re

from contracts.raster import EncodingError

from ..contracts import PdfDocumentSpec
from .base import PdfAssemblyEngine

_TRAILER_ID_RE = re.compile(rb"/ID\s*\[\s*<([0-9A-Fa-f]+)>\s*<([0-9A-Fa-f]+)>\s*\]")
_INFO_DATE_RE = re.compile(rb"/(?:CreationDate|ModDate)\s*\(([^)]*)\)")
_FIXED_DATE = b"D:19700101000000"


def _pin_info_dates(pdf_bytes: bytes) -> bytes:
    """
    Overwrite /CreationDate and /ModDate strings with a fixed epoch date.

    PDFium stamps the save time into the /Info dictionary. Each string keeps
    its length (trailing timezone digits are zeroed), so xref offsets stay valid.
    """

    buf = bytearray(pdf_bytes)
    for match in _INFO_DATE_RE.finditer(pdf_bytes):
        start, end = match.span(1)
        value = match.group(1)
        head = _FIXED_DATE[: len(value)]
        tail = re.sub(rb"[0-9]", b"0", value[len(head):])
        buf[start:end] = head + tail
    return bytes(buf)


def _pin_file_id(pdf_bytes: bytes) -> bytes:
    """
    Replace the trailer /ID with a digest of the document itself.

    PDFium seeds the file ID from a heap address, so two saves of the same
    document differ there. The replacement keeps each hex string's length,
    leaving every xref offset valid.
    """

    matches = list(_TRAILER_ID_RE.finditer(pdf_bytes))
    if not matches:
        return pdf_bytes

    trailer = matches[-1]  # embedded image data precedes the trailer
    spans = [trailer.span(1), trailer.span(2)]

    buf = bytearray(pdf_bytes)
    for start, end in spans:
        buf[start:end] = b"0" * (end - start)

    digest = hashlib.sha256(bytes(buf)).hexdigest().upper().encode("ascii")
    for start, end in spans:
        n = end - start
        buf[start:end] = (digest * (n // len(digest) + 1))[:n]
    return bytes(buf)


class Pypdfium2Engine(PdfAssemblyEngine):
    def backend_id(self) -> str:
        return "pypdfium2"

    def backend_version(self) -> str | None:
        try:
            import pypdfium2 as pdfium  # type: ignore

            return getattr(pdfium, "__version__", None)
        except Exception:
            return None

    def _require_pdfium(self):
        try:
            import pypdfium2 as pdfium  # type: ignore

            return pdfium
        except ImportError as e:
            raise EncodingError(
                "Missing dependency: pypdfium2 is required for PDF assembly."
            ) from e

    def serialize(self, *, spec: PdfDocumentSpec) -> bytes:
        pdfium = self._require_pdfium()

        pdf = pdfium.PdfDocument.new()
        try:
            for page_spec in spec.pages:
                page = pdf.new_page(page_spec.width, page_spec.height)

                # inline: copy the JPEG into the document now, no re-encode (DCTDecode)
                image = pdfium.PdfImage.new(pdf)
                image.load_jpeg(io.BytesIO(page_spec.image.data), inline=True)

                # Image space is the unit square; scale to the target box, then move it.
                placement = page_spec.placement
                matrix = pdfium.PdfMatrix().scale(placement.width, placement.height)
                image.set_matrix(matrix.translate(placement.x, placement.y))

                page.insert_obj(image)
                page.gen_content()

            out = io.BytesIO()
            pdf.save(out)
        except pdfium.PdfiumError as e:
            raise EncodingError(f"PDF assembly failed in pdfium: {e}") from e
        finally:
            pdf.close()

        # dates first: the /ID digest covers them
        return _pin_file_id(_pin_info_dates(out.getvalue()))
