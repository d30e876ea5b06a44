from collections.abc import Iterator
from typing import BinaryIO

import pdfplumber

from promoposter.pdf.base import BasePdfExtractor


class PdfPlumberAdapter(BasePdfExtractor):
    name = "pdfplumber"

    def iter_pages(self, stream: BinaryIO) -> Iterator[str]:
        with pdfplumber.open(stream) as pdf:
            for page in pdf.pages:
                yield page.extract_text() or ""
