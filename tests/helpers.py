import io

from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from smartconvert.processor.models import SourceFile


def make_pdf(pages: list[str]) -> bytes:
    """Build a letter-size PDF with one line of text per page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for text in pages:
        c.drawString(72, 720, text)
        c.showPage()
    c.save()
    return buf.getvalue()


def make_image(
    fmt: str,
    size: tuple[int, int] = (40, 20),
    mode: str = "RGB",
    color: tuple[int, ...] = (200, 30, 30),
) -> bytes:
    buf = io.BytesIO()
    with Image.new(mode, size, color) as image:
        image.save(buf, format=fmt)
    return buf.getvalue()


def make_source(name: str, data: bytes, mime_type: str) -> SourceFile:
    return SourceFile(name=name, size=len(data), mime_type=mime_type, data=data)
