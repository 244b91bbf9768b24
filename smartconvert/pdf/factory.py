from smartconvert.config.settings import Settings
from smartconvert.pdf.base import BasePdfTextExtractor
from smartconvert.pdf.merger import ImageMerger
from smartconvert.pdf.pdfplumber_adapter import PdfPlumberAdapter
from smartconvert.pdf.pymupdf_adapter import PyMuPdfAdapter
from smartconvert.pdf.rasterizer import PdfRasterizer


class PdfToolsFactory:
    """Creates the PDF components configured in settings."""

    TEXT_EXTRACTORS: dict[str, type[BasePdfTextExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create_text_extractor(cls, settings: Settings) -> BasePdfTextExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.TEXT_EXTRACTORS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.TEXT_EXTRACTORS)}"
            )
        return adapter_cls()

    @classmethod
    def create_rasterizer(cls, settings: Settings) -> PdfRasterizer:
        return PdfRasterizer(scale=settings.raster_scale, quality=settings.raster_quality)

    @classmethod
    def create_merger(cls, settings: Settings) -> ImageMerger:
        return ImageMerger(
            page_width_mm=settings.merge_page_width_mm,
            page_height_mm=settings.merge_page_height_mm,
            margin_mm=settings.merge_margin_mm,
            output_name=settings.merged_file_name,
        )
