from promoposter.pdf.base import BasePdfExtractor
from promoposter.pdf.extractor import TextExtractor
from promoposter.pdf.factory import PdfExtractorFactory

__all__ = ["BasePdfExtractor", "PdfExtractorFactory", "TextExtractor"]
