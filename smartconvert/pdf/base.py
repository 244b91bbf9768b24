from abc import ABC, abstractmethod


class BasePdfTextExtractor(ABC):
    """Contract for PDF text extraction adapters used by document insight."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes, max_pages: int) -> str:
        """Extract text from the leading pages of a PDF.

        Args:
            pdf_bytes: Raw PDF file content.
            max_pages: Upper bound on the number of pages read.

        Returns:
            One ``Page <n>: <text>`` line per page read, joined by newlines.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """


def format_pages(page_texts: list[str]) -> str:
    lines = [
        f"Page {number}: {' '.join(text.split())}"
        for number, text in enumerate(page_texts, start=1)
    ]
    return "\n".join(lines)
