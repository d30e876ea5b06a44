from typing import ClassVar

from promoposter.pdf.base import BasePdfExtractor
from promoposter.pdf.pdfplumber_adapter import PdfPlumberAdapter
from promoposter.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Registry of PDF engines, looked up by ``name`` (case-insensitive)."""

    ENGINES: ClassVar[tuple[type[BasePdfExtractor], ...]] = (PdfPlumberAdapter, PyMuPdfAdapter)

    @classmethod
    def names(cls) -> list[str]:
        return [engine.name for engine in cls.ENGINES]

    @classmethod
    def create(cls, engine_name: str) -> BasePdfExtractor:
        wanted = engine_name.strip().lower()
        for engine in cls.ENGINES:
            if engine.name == wanted:
                return engine()
        raise ValueError(f"Unknown PDF engine '{engine_name}'. Choose from: {cls.names()}")
