import pymupdf

from smartconvert.pdf.base import BasePdfTextExtractor, format_pages
from smartconvert.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfTextExtractor):
    """Extracts leading-page text from PDF using PyMuPDF."""

    def extract(self, pdf_bytes: bytes, max_pages: int) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                count = min(doc.page_count, max_pages)
                texts = [doc.load_page(index).get_text() for index in range(count)]
            return format_pages(texts)
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc
