from collections.abc import Iterator
from typing import BinaryIO

import pymupdf

from promoposter.pdf.base import BasePdfExtractor


class PyMuPdfAdapter(BasePdfExtractor):
    name = "pymupdf"

    def iter_pages(self, stream: BinaryIO) -> Iterator[str]:
        with pymupdf.open(stream=stream.read(), filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            for page in doc:
                yield page.get_text()
