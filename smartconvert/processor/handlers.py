from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from smartconvert.archive.extractor import ArchiveExtractor
from smartconvert.config.settings import Settings
from smartconvert.imaging import converter
from smartconvert.ocr.recognizer import TextRecognizer
from smartconvert.pdf.rasterizer import PdfRasterizer
from smartconvert.processor.models import Artifact, ProgressSink, SourceFile
from smartconvert.tools.registry import ToolId


@dataclass
class ConversionResult:
    outputs: list[Artifact] = field(default_factory=list)
    text_result: str | None = None


class ToolHandler(ABC):
    """Runs one tool's operation on a single source file."""

    @abstractmethod
    def run(self, source: SourceFile, on_progress: ProgressSink | None = None) -> ConversionResult:
        raise NotImplementedError


class RasterizeHandler(ToolHandler):
    def __init__(self, rasterizer: PdfRasterizer) -> None:
        self._rasterizer = rasterizer

    def run(self, source: SourceFile, on_progress: ProgressSink | None = None) -> ConversionResult:
        return ConversionResult(outputs=self._rasterizer.rasterize(source, on_progress))


class ConvertImageHandler(ToolHandler):
    def __init__(self, target_format: str, quality: float) -> None:
        self._target_format = target_format
        self._quality = quality

    def run(self, source: SourceFile, on_progress: ProgressSink | None = None) -> ConversionResult:
        data = converter.convert(source.data, self._target_format, self._quality, source.name)
        name = converter.converted_name(source.name, self._target_format)
        return ConversionResult(outputs=[Artifact(name, data)])


class CompressImageHandler(ToolHandler):
    def __init__(self, quality: float) -> None:
        self._quality = quality

    def run(self, source: SourceFile, on_progress: ProgressSink | None = None) -> ConversionResult:
        data = converter.compress(source.data, source.mime_type, self._quality, source.name)
        return ConversionResult(outputs=[Artifact(f"min_{source.name}", data)])


class ExtractArchiveHandler(ToolHandler):
    def __init__(self, extractor: ArchiveExtractor) -> None:
        self._extractor = extractor

    def run(self, source: SourceFile, on_progress: ProgressSink | None = None) -> ConversionResult:
        return ConversionResult(outputs=self._extractor.extract(source))


class RecognizeTextHandler(ToolHandler):
    def __init__(self, recognizer: TextRecognizer) -> None:
        self._recognizer = recognizer

    def run(self, source: SourceFile, on_progress: ProgressSink | None = None) -> ConversionResult:
        return ConversionResult(text_result=self._recognizer.recognize(source))


def build_handlers(
    settings: Settings,
    rasterizer: PdfRasterizer,
    extractor: ArchiveExtractor,
    recognizer: TextRecognizer,
) -> dict[ToolId, ToolHandler]:
    """Handler for every per-file tool. The merge tool is handled by the Dispatcher."""
    to_jpeg = ConvertImageHandler(converter.JPEG, settings.convert_quality)
    return {
        ToolId.PDF_TO_JPG: RasterizeHandler(rasterizer),
        ToolId.PNG_TO_JPG: to_jpeg,
        ToolId.WEBP_TO_JPG: to_jpeg,
        ToolId.JPG_TO_PNG: ConvertImageHandler(converter.PNG, settings.convert_quality),
        ToolId.COMPRESS_IMAGE: CompressImageHandler(settings.compress_quality),
        ToolId.ZIP_EXTRACTOR: ExtractArchiveHandler(extractor),
        ToolId.OCR: RecognizeTextHandler(recognizer),
    }
