import io

import pytest
from PIL import Image

from smartconvert.imaging import converter
from smartconvert.processor.exceptions import CodecError, InputError
from tests.helpers import make_image


def _open(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


class TestConvert:
    def test_png_to_jpeg(self, png_bytes: bytes) -> None:
        result = converter.convert(png_bytes, converter.JPEG)
        with _open(result) as image:
            assert image.format == "JPEG"
            assert image.size == (40, 20)

    def test_transparency_becomes_white(self, png_bytes: bytes) -> None:
        result = converter.convert(png_bytes, converter.JPEG, quality=1.0)
        with _open(result) as image:
            r, g, b = image.getpixel((10, 10))
        assert min(r, g, b) > 240

    def test_jpeg_to_png(self, jpeg_bytes: bytes) -> None:
        result = converter.convert(jpeg_bytes, converter.PNG)
        with _open(result) as image:
            assert image.format == "PNG"
            assert image.size == (30, 60)

    def test_cmyk_jpeg_to_png(self) -> None:
        cmyk = make_image("JPEG", size=(24, 12), mode="CMYK", color=(0, 255, 255, 0))
        result = converter.convert(cmyk, converter.PNG, name="print.jpg")
        with _open(result) as image:
            assert image.format == "PNG"
            assert image.mode == "RGB"
            assert image.size == (24, 12)

    def test_png_modes_are_kept(self) -> None:
        gray = make_image("PNG", mode="L", color=(128,))
        with _open(converter.convert(gray, converter.PNG)) as image:
            assert image.mode == "L"

    def test_webp_to_jpeg(self, webp_bytes: bytes) -> None:
        with _open(converter.convert(webp_bytes, converter.JPEG)) as image:
            assert image.format == "JPEG"

    def test_undecodable_input_raises_codec_error(self) -> None:
        with pytest.raises(CodecError, match="Cannot decode broken.png"):
            converter.convert(b"not an image", converter.JPEG, name="broken.png")

    def test_empty_input_raises_input_error(self) -> None:
        with pytest.raises(InputError):
            converter.convert(b"", converter.JPEG)

    def test_unsupported_target_raises(self, png_bytes: bytes) -> None:
        with pytest.raises(ValueError, match="Unsupported"):
            converter.convert(png_bytes, "image/gif")


class TestCompress:
    def test_png_stays_png(self, png_bytes: bytes) -> None:
        with _open(converter.compress(png_bytes, "image/png")) as image:
            assert image.format == "PNG"

    def test_other_types_become_jpeg(self, webp_bytes: bytes) -> None:
        with _open(converter.compress(webp_bytes, "image/webp")) as image:
            assert image.format == "JPEG"

    def test_lower_quality_is_smaller(self) -> None:
        noisy = Image.effect_noise((200, 200), 80).convert("RGB")
        buf = io.BytesIO()
        noisy.save(buf, format="JPEG", quality=95)
        original = buf.getvalue()
        assert len(converter.compress(original, "image/jpeg", quality=0.3)) < len(original)


class TestNames:
    def test_converted_name_swaps_last_extension(self) -> None:
        assert converter.converted_name("holiday.photo.png", converter.JPEG) == "holiday.photo.jpg"

    def test_converted_name_without_extension(self) -> None:
        assert converter.converted_name("scan", converter.PNG) == "scan.png"

    @pytest.mark.parametrize(("quality", "expected"), [(0.0, 1), (0.6, 60), (0.92, 92), (1.0, 100)])
    def test_quality_percent(self, quality: float, expected: int) -> None:
        assert converter.quality_percent(quality) == expected
