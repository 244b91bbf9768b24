"""Merge an ordered list of images into one PDF, one page per image."""

from dataclasses import dataclass

import pymupdf

from smartconvert.imaging.converter import JPEG, PNG, encode_image, open_image
from smartconvert.logging.logger import Log
from smartconvert.processor.exceptions import InputError, MergeError, ProcessorError
from smartconvert.processor.models import Artifact, SourceFile

POINTS_PER_MM = 72 / 25.4
_JPEG_EMBED_QUALITY = 0.92


@dataclass(frozen=True)
class Placement:
    """Image rectangle on a page, in page units."""

    x: float
    y: float
    width: float
    height: float


def fit_image(
    image_width: float,
    image_height: float,
    page_width: float,
    page_height: float,
    margin: float,
) -> Placement:
    """Fit an image into the page's content area, keeping its aspect ratio.

    Wider-than-content images use the full content width, the rest use the
    full content height. The result is centered on the page.
    """
    content_width = page_width - margin * 2
    content_height = page_height - margin * 2
    image_ratio = image_width / image_height
    content_ratio = content_width / content_height

    if image_ratio > content_ratio:
        width = content_width
        height = width / image_ratio
    else:
        height = content_height
        width = height * image_ratio

    return Placement(
        x=(page_width - width) / 2,
        y=(page_height - height) / 2,
        width=width,
        height=height,
    )


class ImageMerger:
    """Builds a single portrait PDF from images, all or nothing."""

    def __init__(
        self,
        page_width_mm: float = 210.0,
        page_height_mm: float = 297.0,
        margin_mm: float = 10.0,
        output_name: str = "merged_images.pdf",
    ) -> None:
        self._page_width = page_width_mm * POINTS_PER_MM
        self._page_height = page_height_mm * POINTS_PER_MM
        self._margin = margin_mm * POINTS_PER_MM
        self._output_name = output_name

    def merge(self, sources: list[SourceFile]) -> Artifact:
        """Create one page per source image, in order.

        Raises:
            InputError: if *sources* is empty.
            MergeError: if any image cannot be decoded or embedded. No
                document is returned in that case.
        """
        if not sources:
            raise InputError("No images to merge")

        with pymupdf.open() as document:
            for source in sources:
                try:
                    self._add_page(document, source)
                except ProcessorError as exc:
                    raise MergeError(f"Failed to merge {source.name}: {exc}") from exc
                except Exception as exc:
                    raise MergeError(f"Failed to embed {source.name}: {exc}") from exc
            try:
                data = document.tobytes(garbage=3, deflate=True)
            except Exception as exc:
                raise MergeError(f"Failed to write merged PDF: {exc}") from exc

        Log.info(f"Merged {len(sources)} images into {self._output_name}")
        return Artifact(self._output_name, data)

    def _add_page(self, document: pymupdf.Document, source: SourceFile) -> None:
        stream, width, height = self._embeddable(source)
        placement = fit_image(width, height, self._page_width, self._page_height, self._margin)
        page = document.new_page(width=self._page_width, height=self._page_height)
        rect = pymupdf.Rect(
            placement.x,
            placement.y,
            placement.x + placement.width,
            placement.y + placement.height,
        )
        page.insert_image(rect, stream=stream, keep_proportion=False)

    @staticmethod
    def _embeddable(source: SourceFile) -> tuple[bytes, int, int]:
        """Return the bytes to embed and the natural pixel size.

        PNG and JPEG sources are embedded as-is; anything else is
        re-encoded as JPEG. The declared mime type must match the decoded
        format: an image/png source whose bytes are not PNG is re-encoded too.
        """
        with open_image(source.data, source.name) as image:
            width, height = image.size
            if source.mime_type == PNG and image.format == "PNG":
                return source.data, width, height
            if source.mime_type != PNG and image.format == "JPEG":
                return source.data, width, height
            return encode_image(image, JPEG, _JPEG_EMBED_QUALITY), width, height
