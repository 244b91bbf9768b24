import io
import zipfile

import pytest

from tests.helpers import make_image, make_pdf


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Single-page PDF with known text content."""
    return make_pdf(["Hello PDF World"])


@pytest.fixture()
def five_page_pdf_bytes() -> bytes:
    return make_pdf([f"Page {n} content" for n in range(1, 6)])


@pytest.fixture()
def png_bytes() -> bytes:
    """Fully transparent RGBA PNG."""
    return make_image("PNG", mode="RGBA", color=(0, 0, 255, 0))


@pytest.fixture()
def jpeg_bytes() -> bytes:
    return make_image("JPEG", size=(30, 60))


@pytest.fixture()
def webp_bytes() -> bytes:
    return make_image("WEBP")


@pytest.fixture()
def zip_bytes() -> bytes:
    """Archive with one directory entry and three file entries."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as archive:
        archive.writestr("folder/", b"")
        archive.writestr("folder/sub/report.txt", b"report")
        archive.writestr("notes.md", b"# notes")
        archive.writestr("folder/data.csv", b"a,b\n1,2\n")
    return buf.getvalue()
