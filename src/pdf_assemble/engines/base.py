from __future__ import annotations

from abc import ABC, abstractmethod

from ..contracts import PdfDocumentSpec


class PdfAssemblyEngine(ABC):
    """
    PDF serialization engine abstraction.

    Engines must:
    - Emit exactly the pages/images described by the PdfDocumentSpec, nothing more
    - Embed JPEG data as-is (DCTDecode), never re-encode it
    - Be deterministic: identical PdfDocumentSpec -> identical bytes
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    def backend_version(self) -> str | None:
        return None

    @abstractmethod
    def serialize(self, *, spec: PdfDocumentSpec) -> bytes:
        raise NotImplementedError
