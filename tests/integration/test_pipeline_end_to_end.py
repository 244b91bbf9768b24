"""End-to-end runs of the real pipeline: settings -> processor -> delivery."""

import io
import zipfile
from pathlib import Path

import pymupdf
import pytest
from PIL import Image

from smartconvert.config.settings import Settings
from smartconvert.processor.exceptions import MergeError
from smartconvert.processor.models import FileStatus
from smartconvert.processor.processor import Processor, build_processor
from tests.helpers import make_image, make_pdf, make_source


@pytest.fixture()
def processor() -> Processor:
    return build_processor(
        Settings(insight_provider="example", raster_scale=0.5, pdf_engine="pymupdf")
    )


def _zip_names(data: bytes) -> list[str]:
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        return sorted(archive.namelist())


class TestPdfToJpg:
    def test_pages_are_bundled(self, processor: Processor, five_page_pdf_bytes: bytes) -> None:
        processor.select_tool("pdf-to-jpg")
        processor.add_files([make_source("report.pdf", five_page_pdf_bytes, "application/pdf")])
        progress: list[int] = []

        report = processor.process(lambda entity, percent: progress.append(percent))
        delivery = processor.deliver()

        assert report.completed == 1
        assert progress == [20, 40, 60, 80, 100]
        assert delivery is not None
        assert delivery.name == "SmartConvert_Files.zip"
        assert _zip_names(delivery.data) == [
            f"Converted_Files/report_page-{n}.jpg" for n in range(1, 6)
        ]

    def test_insight_from_first_pages(self, processor: Processor) -> None:
        pdf = make_pdf(["Quarterly results", "Second page"])
        processor.select_tool("pdf-to-jpg")
        processor.add_files([make_source("q.pdf", pdf, "application/pdf")])

        insight = processor.analyze()

        assert insight is not None
        assert insight.summary == "Page 1: Quarterly results"
        assert processor.insight == insight

    def test_multiple_file_tool_appends(
        self, processor: Processor, sample_pdf_bytes: bytes
    ) -> None:
        processor.select_tool("pdf-to-jpg")
        processor.add_files([make_source("a.pdf", sample_pdf_bytes, "application/pdf")])
        processor.add_files([make_source("b.pdf", sample_pdf_bytes, "application/pdf")])
        assert [e.name for e in processor.files] == ["a.pdf", "b.pdf"]


class TestImageTools:
    def test_mixed_batch_keeps_going(self, processor: Processor) -> None:
        processor.select_tool("png-to-jpg")
        processor.add_files([
            make_source("a.png", make_image("PNG"), "image/png"),
            make_source("b.png", b"corrupt", "image/png"),
            make_source("c.png", make_image("PNG", mode="RGBA", color=(0, 0, 0, 0)), "image/png"),
        ])

        report = processor.process()
        delivery = processor.deliver()

        assert [e.status for e in processor.files] == [
            FileStatus.COMPLETED,
            FileStatus.ERROR,
            FileStatus.COMPLETED,
        ]
        assert [name for name, _ in report.failed] == ["b.png"]
        assert delivery is not None
        assert _zip_names(delivery.data) == ["Converted_Files/a.jpg", "Converted_Files/c.jpg"]

    def test_reprocessing_skips_completed(self, processor: Processor) -> None:
        processor.select_tool("compress-image")
        processor.add_files([make_source("photo.jpg", make_image("JPEG"), "image/jpeg")])
        processor.process()
        first = processor.files[0].outputs

        processor.process()

        assert processor.files[0].outputs == first
        assert processor.files[0].history == [
            FileStatus.PENDING,
            FileStatus.PROCESSING,
            FileStatus.COMPLETED,
        ]

    def test_single_conversion_is_delivered_directly(self, processor: Processor) -> None:
        processor.select_tool("webp-to-jpg")
        processor.add_files([make_source("pic.webp", make_image("WEBP"), "image/webp")])
        processor.process()
        delivery = processor.deliver()
        assert delivery is not None
        assert not delivery.bundled
        assert delivery.name == "pic.jpg"
        with Image.open(io.BytesIO(delivery.data)) as image:
            assert image.format == "JPEG"


class TestJpgToPdf:
    def test_merges_queue_into_one_pdf(self, processor: Processor) -> None:
        processor.select_tool("jpg-to-pdf")
        processor.add_files([
            make_source("one.jpg", make_image("JPEG"), "image/jpeg"),
            make_source("two.png", make_image("PNG"), "image/png"),
        ])

        processor.process()
        delivery = processor.deliver()

        assert delivery is not None
        assert delivery.name == "merged_images.pdf"
        assert not delivery.bundled
        with pymupdf.open(stream=delivery.data, filetype="pdf") as doc:
            assert doc.page_count == 2

    def test_failed_merge_marks_every_file(self, processor: Processor) -> None:
        processor.select_tool("jpg-to-pdf")
        processor.add_files([
            make_source("one.jpg", make_image("JPEG"), "image/jpeg"),
            make_source("bad.jpg", b"garbage", "image/jpeg"),
        ])

        with pytest.raises(MergeError):
            processor.process()

        assert all(e.status == FileStatus.ERROR for e in processor.files)
        assert processor.deliver() is None


class TestZipExtractor:
    def test_single_file_tool_replaces_queue(
        self, processor: Processor, zip_bytes: bytes
    ) -> None:
        processor.select_tool("zip-extractor")
        processor.add_files([make_source("first.zip", zip_bytes, "application/zip")])
        processor.add_files([
            make_source("second.zip", zip_bytes, "application/zip"),
            make_source("third.zip", zip_bytes, "application/zip"),
        ])
        assert [e.name for e in processor.files] == ["second.zip"]

    def test_entries_are_rebundled(self, processor: Processor, zip_bytes: bytes) -> None:
        processor.select_tool("zip-extractor")
        processor.add_files([make_source("bundle.zip", zip_bytes, "application/zip")])

        processor.process()
        delivery = processor.deliver()

        assert delivery is not None
        assert _zip_names(delivery.data) == [
            "Converted_Files/data.csv",
            "Converted_Files/notes.md",
            "Converted_Files/report.txt",
        ]


class TestPathsFromDisk:
    def test_add_paths(self, processor: Processor, tmp_path: Path) -> None:
        path = tmp_path / "shot.jpg"
        path.write_bytes(make_image("JPEG"))
        processor.select_tool("jpg-to-png")
        processor.add_paths([path])
        processor.process()
        delivery = processor.deliver()
        assert delivery is not None
        assert delivery.name == "shot.png"
