from pathlib import Path

from promoposter.config.settings import Settings
from promoposter.logging.logger import Log
from promoposter.pdf.base import BasePdfExtractor
from promoposter.pdf.exceptions import ExtractionError
from promoposter.pdf.factory import PdfExtractorFactory


class TextExtractor:
    """Turns a stored upload into raw text. Failures are terminal for the request."""

    def __init__(self, engine: BasePdfExtractor) -> None:
        self._engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "TextExtractor":
        return cls(PdfExtractorFactory.create(settings.pdf_engine))

    def extract(self, path: Path) -> str:
        try:
            handle = path.open("rb")
        except OSError as exc:
            raise ExtractionError(f"Cannot read uploaded document {path.name}: {exc}") from exc

        with handle, Log.timed(f"PDF text extraction ({self._engine.name})"):
            text = self._engine.extract(handle)
        Log.info(f"Extracted {len(text)} chars from {path.name}")
        return text
