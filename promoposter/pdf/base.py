from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import BinaryIO

from promoposter.pdf.exceptions import ExtractionError


class BasePdfExtractor(ABC):
    """PDF engine adapter: yields page texts from an open binary stream."""

    name: str = ""

    @abstractmethod
    def iter_pages(self, stream: BinaryIO) -> Iterator[str]:
        """Yield the text of each page in document order ("" for image-only pages)."""

    def extract(self, stream: BinaryIO) -> str:
        """Page texts joined by newlines and stripped.

        Raises:
            ExtractionError: if the engine cannot parse the stream.
        """
        try:
            pages = list(self.iter_pages(stream))
        except Exception as exc:
            raise ExtractionError(f"Not a readable PDF document: {exc}") from exc
        return "\n".join(pages).strip()
