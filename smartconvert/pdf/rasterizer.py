"""Page-by-page PDF rasterization.

Each page is rendered with PyMuPDF, handed to Pillow for JPEG encoding and
released before the next page starts. A page that fails to render is logged
and skipped; only a document that cannot be opened fails the whole call.
"""

import math
import re
from collections.abc import Iterator
from contextlib import contextmanager

import pymupdf
from PIL import Image

from smartconvert.imaging.converter import JPEG, encode_image
from smartconvert.logging.logger import Log
from smartconvert.processor.exceptions import CodecError, InputError
from smartconvert.processor.models import Artifact, ProgressSink, SourceFile

_PDF_SUFFIX_RE = re.compile(r"\.pdf$", re.IGNORECASE)


def page_image_name(source_name: str, page_number: int) -> str:
    return f"{_PDF_SUFFIX_RE.sub('', source_name)}_page-{page_number}.jpg"


def progress_percent(page_number: int, total_pages: int) -> int:
    """Half-up rounding of the completed fraction, 1..100."""
    return math.floor(page_number / total_pages * 100 + 0.5)


class PdfRasterizer:
    """Converts a PDF into an ordered list of JPEG page images."""

    def __init__(self, scale: float = 2.0, quality: float = 0.9) -> None:
        self._scale = scale
        self._quality = quality

    def rasterize(
        self,
        source: SourceFile,
        on_progress: ProgressSink | None = None,
    ) -> list[Artifact]:
        """Render every page of *source*.

        Progress is reported once per attempted page, in page order, whether
        or not the page succeeded.

        Raises:
            InputError: if the source is empty.
            CodecError: if the document cannot be opened.
        """
        if not source.data:
            raise InputError(f"{source.name} is empty")

        images: list[Artifact] = []
        with self._open(source) as document:
            total = document.page_count
            Log.info(f"Rasterizing {total} pages", file=source.name, scale=self._scale)
            for index in range(total):
                page_number = index + 1
                try:
                    data = self._render_page(document, index)
                except Exception as exc:
                    Log.warning(f"Skipping page {page_number}: {exc}", file=source.name)
                else:
                    images.append(Artifact(page_image_name(source.name, page_number), data))
                if on_progress is not None:
                    on_progress(progress_percent(page_number, total))

        Log.info(f"Rasterized {len(images)} of {total} pages", file=source.name)
        return images

    @contextmanager
    def _open(self, source: SourceFile) -> Iterator[pymupdf.Document]:
        try:
            document = pymupdf.open(stream=source.data, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise CodecError(f"Cannot open {source.name}: {exc}") from exc
        try:
            yield document
        finally:
            document.close()

    def _render_page(self, document: pymupdf.Document, index: int) -> bytes:
        with self._page_surface(document, index) as image:
            return encode_image(image, JPEG, self._quality)

    @contextmanager
    def _page_surface(self, document: pymupdf.Document, index: int) -> Iterator[Image.Image]:
        """Render one page to an RGB image and drop the pixmap on exit."""
        page = document.load_page(index)
        pixmap = None
        image = None
        try:
            pixmap = page.get_pixmap(matrix=pymupdf.Matrix(self._scale, self._scale), alpha=False)
            image = Image.frombytes("RGB", (pixmap.width, pixmap.height), pixmap.samples)
            yield image
        finally:
            if image is not None:
                image.close()
            del pixmap, page
