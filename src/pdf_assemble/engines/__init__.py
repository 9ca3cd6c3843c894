from .base import PdfAssemblyEngine
from .pypdfium2_engine import Pypdfium2Engine

__all__ = ["PdfAssemblyEngine", "Pypdfium2Engine"]
