from smartconvert.processor.exceptions import CodecError


class PdfExtractionError(CodecError):
    """Raised when text cannot be extracted from a PDF."""
