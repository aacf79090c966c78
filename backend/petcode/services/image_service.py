"""Utilities for hashing and transforming uploaded images and rendering QR tags."""

from __future__ import annotations

import hashlib
from io import BytesIO

import qrcode
from PIL import Image, ImageOps, UnidentifiedImageError
from qrcode.constants import ERROR_CORRECT_M
from qrcode.image.pil import PilImage


def hash_bytes(data: bytes) -> str:
    """Return the SHA-256 hex digest for the given bytes."""

    return hashlib.sha256(data).hexdigest()


def read_dimensions(data: bytes) -> tuple[int, int] | None:
    """Return (width, height) when the bytes decode as an image, else ``None``."""

    try:
        with Image.open(BytesIO(data)) as image:
            image.verify()
            return image.size
    except (UnidentifiedImageError, OSError, SyntaxError):
        return None


def _normalise_mode(image: Image.Image) -> Image.Image:
    if image.mode in {"RGB", "RGBA"}:
        return image
    return image.convert("RGBA") if "A" in image.getbands() else image.convert("RGB")


def _resize_image(image: Image.Image, max_width: int) -> Image.Image:
    width, height = image.size
    longest = max(width, height)
    if longest <= max_width:
        return image
    scale = max_width / float(longest)
    new_size = (max(int(width * scale), 1), max(int(height * scale), 1))
    return image.resize(new_size, Image.Resampling.LANCZOS)


def _save_webp(image: Image.Image, quality: int) -> bytes:
    buffer = BytesIO()
    image.save(buffer, format="WEBP", quality=max(1, min(quality, 100)), method=6)
    return buffer.getvalue()


def to_webp(data: bytes, max_width: int, quality: int) -> tuple[bytes, int, int]:
    """Convert image bytes to WebP, constraining the maximum width.

    Returns a tuple of (webp_bytes, width, height). If the input is not an image,
    the original bytes are returned with zero dimensions recorded.
    """

    try:
        with Image.open(BytesIO(data)) as image:
            image.load()
            image = ImageOps.exif_transpose(image)
            resized = _resize_image(_normalise_mode(image), max_width)
            width, height = resized.size
            return _save_webp(resized, quality), width, height
    except (UnidentifiedImageError, OSError):
        return data, 0, 0


def to_square_thumbnail(data: bytes, size: int, quality: int) -> bytes | None:
    """Centre-crop and scale an image to a ``size`` x ``size`` WebP thumbnail."""

    try:
        with Image.open(BytesIO(data)) as image:
            image.load()
            image = ImageOps.exif_transpose(image)
            fitted = ImageOps.fit(
                _normalise_mode(image),
                (size, size),
                method=Image.Resampling.LANCZOS,
            )
            return _save_webp(fitted, quality)
    except (UnidentifiedImageError, OSError):
        return None


def render_qr_png(value: str, size: int) -> bytes:
    """Render ``value`` as a ``size`` x ``size`` PNG QR code (error level M)."""

    code = qrcode.QRCode(error_correction=ERROR_CORRECT_M, box_size=10, border=4)
    code.add_data(value)
    code.make(fit=True)
    image = code.make_image(image_factory=PilImage).get_image().convert("L")
    # Modules must keep hard edges.
    image = image.resize((size, size), Image.Resampling.NEAREST)
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
