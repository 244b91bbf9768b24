"""Static table of the conversion tools a session can select."""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import PurePosixPath


class ToolId(StrEnum):
    PDF_TO_JPG = "pdf-to-jpg"
    JPG_TO_PDF = "jpg-to-pdf"
    PNG_TO_JPG = "png-to-jpg"
    JPG_TO_PNG = "jpg-to-png"
    WEBP_TO_JPG = "webp-to-jpg"
    COMPRESS_IMAGE = "compress-image"
    ZIP_EXTRACTOR = "zip-extractor"
    OCR = "ocr"


@dataclass(frozen=True)
class ToolDescriptor:
    """One selectable operation and the inputs it accepts."""

    id: ToolId
    name: str
    description: str
    category: str  # "PDF", "Image" or "Utility"
    accept: str  # comma-separated mime types, "type/*" wildcards or ".ext" suffixes
    multiple: bool

    def accepts(self, name: str, mime_type: str) -> bool:
        """Return True if a file with this name and mime type may be queued."""
        suffix = PurePosixPath(name).suffix.lower()
        mime = (mime_type or "").lower()
        for pattern in self.patterns:
            if pattern.startswith("."):
                if suffix == pattern:
                    return True
            elif pattern.endswith("/*"):
                if mime.startswith(pattern[:-1]):
                    return True
            elif mime == pattern:
                return True
        return False

    @property
    def patterns(self) -> list[str]:
        return [p.strip().lower() for p in self.accept.split(",") if p.strip()]


TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        id=ToolId.PDF_TO_JPG,
        name="PDF to JPG",
        description="Convert unlimited PDFs to images",
        category="PDF",
        accept=".pdf, application/pdf",
        multiple=True,
    ),
    ToolDescriptor(
        id=ToolId.JPG_TO_PDF,
        name="JPG to PDF",
        description="Merge images into a single PDF",
        category="PDF",
        accept="image/*",
        multiple=True,
    ),
    ToolDescriptor(
        id=ToolId.PNG_TO_JPG,
        name="PNG to JPG",
        description="Convert PNG images to JPG",
        category="Image",
        accept="image/png",
        multiple=True,
    ),
    ToolDescriptor(
        id=ToolId.JPG_TO_PNG,
        name="JPG to PNG",
        description="Convert JPG images to PNG",
        category="Image",
        accept="image/jpeg, image/jpg",
        multiple=True,
    ),
    ToolDescriptor(
        id=ToolId.WEBP_TO_JPG,
        name="WEBP to JPG",
        description="Convert WEBP to standard JPG",
        category="Image",
        accept="image/webp",
        multiple=True,
    ),
    ToolDescriptor(
        id=ToolId.COMPRESS_IMAGE,
        name="Image Compressor",
        description="Reduce image size quality",
        category="Image",
        accept="image/*",
        multiple=True,
    ),
    ToolDescriptor(
        id=ToolId.ZIP_EXTRACTOR,
        name="ZIP Extractor",
        description="Extract files from ZIP archives",
        category="Utility",
        accept=".zip, application/zip, application/x-zip-compressed",
        multiple=False,
    ),
    ToolDescriptor(
        id=ToolId.OCR,
        name="Image to Text (OCR)",
        description="Extract text from images",
        category="Utility",
        accept="image/*",
        multiple=False,
    ),
)

_BY_ID: dict[ToolId, ToolDescriptor] = {tool.id: tool for tool in TOOLS}


def get_tool(tool_id: str) -> ToolDescriptor:
    """Look up a tool by its identifier.

    Raises:
        ValueError: if the identifier is not one of the fixed tool ids.
    """
    try:
        return _BY_ID[ToolId(tool_id)]
    except ValueError:
        raise ValueError(
            f"Unknown tool '{tool_id}'. Choose from: {[t.value for t in ToolId]}"
        ) from None


def search_tools(query: str, category: str | None = None) -> list[ToolDescriptor]:
    """Case-insensitive match on tool name or description."""
    q = query.lower()
    return [
        tool
        for tool in TOOLS
        if (category is None or tool.category == category)
        and (q in tool.name.lower() or q in tool.description.lower())
    ]
