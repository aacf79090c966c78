"""Tests for image transformation utilities."""

from __future__ import annotations

from io import BytesIO

from PIL import Image

from petcode.services.image_service import (
    hash_bytes,
    read_dimensions,
    render_qr_png,
    to_square_thumbnail,
    to_webp,
)


def _create_sample_jpeg(width: int = 2400, height: int = 1600) -> bytes:
    image = Image.new("RGB", (width, height), color=(200, 90, 10))
    buffer = BytesIO()
    image.save(buffer, format="JPEG", quality=92)
    return buffer.getvalue()


def test_hash_bytes_is_deterministic() -> None:
    sample = b"example-bytes"
    assert hash_bytes(sample) == hash_bytes(sample)
    assert hash_bytes(sample) != hash_bytes(b"other-bytes")


def test_read_dimensions() -> None:
    assert read_dimensions(_create_sample_jpeg(640, 480)) == (640, 480)
    assert read_dimensions(b"not-an-image") is None


def test_to_webp_resizes_and_converts() -> None:
    original = _create_sample_jpeg()
    webp_bytes, width, height = to_webp(original, max_width=1200, quality=80)

    assert webp_bytes != original
    assert max(width, height) <= 1200
    assert width > 0 and height > 0
    with Image.open(BytesIO(webp_bytes)) as converted:
        assert converted.format == "WEBP"


def test_to_webp_returns_original_for_non_images() -> None:
    raw = b"not-an-image"
    output, width, height = to_webp(raw, max_width=800, quality=80)
    assert output == raw
    assert width == 0 and height == 0


def test_square_thumbnail_crops_to_size() -> None:
    thumbnail = to_square_thumbnail(_create_sample_jpeg(1200, 500), 400, 80)
    assert thumbnail is not None
    with Image.open(BytesIO(thumbnail)) as image:
        assert image.size == (400, 400)

    assert to_square_thumbnail(b"nope", 400, 80) is None


def test_render_qr_png_is_square_black_and_white() -> None:
    png = render_qr_png("http://localhost:5173/mascota/k3x9b2m4n8p1", 300)

    with Image.open(BytesIO(png)) as image:
        assert image.format == "PNG"
        assert image.size == (300, 300)
        assert image.getpixel((0, 0)) == 255
        assert set(image.getdata()) == {0, 255}
