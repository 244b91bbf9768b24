import io

import pdfplumber

from smartconvert.pdf.base import BasePdfTextExtractor, format_pages
from smartconvert.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfTextExtractor):
    """Extracts leading-page text from PDF using pdfplumber."""

    def extract(self, pdf_bytes: bytes, max_pages: int) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                texts = []
                for page in pdf.pages[:max_pages]:
                    texts.append(page.extract_text() or "")
                    page.close()
            return format_pages(texts)
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
