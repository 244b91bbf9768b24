import pytesseract

from smartconvert.imaging.converter import open_image
from smartconvert.logging.logger import Log
from smartconvert.processor.exceptions import RecognitionError
from smartconvert.processor.models import SourceFile


class TextRecognizer:
    """Extracts text from images with the local Tesseract engine."""

    def __init__(self, language: str = "eng", tesseract_cmd: str = "") -> None:
        self._language = language
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def recognize(self, source: SourceFile) -> str:
        """Return the recognized text of *source*.

        Raises:
            RecognitionError: on any decoding or engine failure.
        """
        try:
            with open_image(source.data, source.name) as image:
                text = pytesseract.image_to_string(image, lang=self._language)
        except Exception as exc:
            Log.error(f"OCR failed: {exc}", file=source.name)
            raise RecognitionError("Text recognition failed. Please try again.") from exc
        Log.info(f"Recognized {len(text)} chars", file=source.name)
        return text
