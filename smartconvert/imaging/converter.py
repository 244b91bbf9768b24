"""Raster image format conversion and compression with Pillow."""

import io
import re

from PIL import Image, UnidentifiedImageError

from smartconvert.processor.exceptions import CodecError, InputError

JPEG = "image/jpeg"
PNG = "image/png"

_PIL_FORMATS = {JPEG: "JPEG", PNG: "PNG"}
_EXTENSIONS = {JPEG: ".jpg", PNG: ".png"}
_EXTENSION_RE = re.compile(r"\.[^/.]+$")
# Modes the PNG encoder writes directly; CMYK, YCbCr and the like are converted.
_PNG_MODES = frozenset({"1", "L", "LA", "P", "RGB", "RGBA", "I", "I;16"})


def quality_percent(quality: float) -> int:
    """Map a 0..1 quality to Pillow's 1..100 JPEG scale."""
    return max(1, min(100, round(quality * 100)))


def encode_image(image: Image.Image, target_format: str, quality: float) -> bytes:
    """Encode a decoded image to JPEG or PNG bytes.

    JPEG has no alpha channel, so transparent areas are painted white.
    """
    if target_format not in _PIL_FORMATS:
        raise ValueError(f"Unsupported target format '{target_format}'")
    buf = io.BytesIO()
    if target_format == JPEG:
        with _flatten(image) as rgb:
            rgb.save(buf, format="JPEG", quality=quality_percent(quality))
    elif image.mode in _PNG_MODES:
        image.save(buf, format="PNG", optimize=True)
    else:
        with image.convert("RGBA" if "A" in image.getbands() else "RGB") as rgb:
            rgb.save(buf, format="PNG", optimize=True)
    return buf.getvalue()


def _flatten(image: Image.Image) -> Image.Image:
    if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        rgba.close()
        return background
    return image.convert("RGB")


def open_image(data: bytes, name: str = "image") -> Image.Image:
    """Decode image bytes.

    Raises:
        InputError: if *data* is empty.
        CodecError: if Pillow cannot identify or load the image.
    """
    if not data:
        raise InputError(f"{name} is empty")
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise CodecError(f"Cannot decode {name}: {exc}") from exc
    return image


def convert(data: bytes, target_format: str, quality: float = 0.92, name: str = "image") -> bytes:
    """Re-encode an image into *target_format* (``image/jpeg`` or ``image/png``)."""
    if target_format not in _PIL_FORMATS:
        raise ValueError(f"Unsupported target format '{target_format}'")
    with open_image(data, name) as image:
        try:
            return encode_image(image, target_format, quality)
        except (OSError, ValueError) as exc:
            raise CodecError(f"Cannot encode {name} as {target_format}: {exc}") from exc


def compress(data: bytes, mime_type: str, quality: float = 0.6, name: str = "image") -> bytes:
    """Re-encode at lower quality. PNG stays PNG, everything else becomes JPEG."""
    target = PNG if mime_type == PNG else JPEG
    return convert(data, target, quality, name)


def converted_name(name: str, target_format: str) -> str:
    """Swap the last extension of *name* for the target format's."""
    return _EXTENSION_RE.sub("", name) + _EXTENSIONS[target_format]
