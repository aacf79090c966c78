"""Pet photo storage.

Photos are normalised to WebP and paired with a square thumbnail; the
thumbnail URL is what public pages prefer. Uploads are never allowed to
break a profile workflow, callers go through :func:`try_upload_pet_photo`.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from petcode.core.config import Settings
from petcode.integrations import S3Client, S3ClientError
from petcode.services.errors import PhotoUploadError
from petcode.services.image_service import (
    hash_bytes,
    read_dimensions,
    to_square_thumbnail,
    to_webp,
)

logger = logging.getLogger(__name__)

ALLOWED_PHOTO_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})


@dataclass(frozen=True)
class UploadedPhoto:
    """Canonical and display-optimized URLs of a stored photo."""

    url: str
    optimized_url: str


class PhotoStorage:
    """Validates and stores pet photos in S3-compatible storage."""

    def __init__(
        self,
        s3_client: S3Client,
        *,
        max_bytes: int,
        thumbnail_size: int,
        max_width: int,
        webp_quality: int,
        cache_seconds: int,
    ) -> None:
        self._s3 = s3_client
        self._max_bytes = max_bytes
        self._thumbnail_size = thumbnail_size
        self._max_width = max_width
        self._quality = webp_quality
        self._cache_seconds = cache_seconds

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    @classmethod
    def from_settings(cls, s3_client: S3Client, settings: Settings) -> "PhotoStorage":
        return cls(
            s3_client,
            max_bytes=settings.photo_max_bytes,
            thumbnail_size=settings.photo_thumbnail_size,
            max_width=settings.image_max_width,
            webp_quality=settings.image_webp_quality,
            cache_seconds=settings.s3_cache_seconds,
        )

    def validate(self, data: bytes, content_type: str) -> None:
        if not data:
            raise PhotoUploadError("Photo is empty")
        if len(data) > self._max_bytes:
            raise PhotoUploadError(
                f"Photo is too large: {len(data) / 1024 / 1024:.2f}MB "
                f"(max {self._max_bytes / 1024 / 1024:.0f}MB)"
            )
        if content_type.lower() not in ALLOWED_PHOTO_TYPES:
            raise PhotoUploadError(f"Unsupported photo type: {content_type}")
        if read_dimensions(data) is None:
            raise PhotoUploadError("Photo could not be decoded")

    def upload(
        self, data: bytes, content_type: str, *, client_id: uuid.UUID
    ) -> UploadedPhoto:
        """Store a photo and its thumbnail, returning both URLs."""
        self.validate(data, content_type)
        digest = hash_bytes(data)
        original_key = f"pets/{client_id}/{digest}.webp"
        thumbnail_key = f"pets/{client_id}/{digest}-{self._thumbnail_size}.webp"
        if self._s3.exists(original_key) and self._s3.exists(thumbnail_key):
            logger.debug("Photo %s already stored for client %s", digest, client_id)
            return UploadedPhoto(
                url=self._s3.build_object_url(original_key),
                optimized_url=self._s3.build_object_url(thumbnail_key),
            )

        web_bytes, width, height = to_webp(data, self._max_width, self._quality)
        if not (width and height):
            raise PhotoUploadError("Photo could not be converted")
        thumbnail = to_square_thumbnail(data, self._thumbnail_size, self._quality)
        if thumbnail is None:
            raise PhotoUploadError("Photo thumbnail could not be generated")

        try:
            self._s3.put_object_with_cache(
                original_key,
                web_bytes,
                content_type="image/webp",
                cache_seconds=self._cache_seconds,
                tags={"class": "orig"},
            )
            self._s3.put_object_with_cache(
                thumbnail_key,
                thumbnail,
                content_type="image/webp",
                cache_seconds=self._cache_seconds,
                tags={"class": "thumb"},
            )
        except S3ClientError as exc:
            raise PhotoUploadError(str(exc)) from exc

        return UploadedPhoto(
            url=self._s3.build_object_url(original_key),
            optimized_url=self._s3.build_object_url(thumbnail_key),
        )


def try_upload_pet_photo(
    storage: PhotoStorage | None,
    data: bytes | None,
    content_type: str | None,
    *,
    client_id: uuid.UUID,
) -> UploadedPhoto | None:
    """Upload a photo, returning ``None`` instead of raising on any failure."""
    if not data:
        return None
    if storage is None:
        logger.warning("Photo storage is not configured; skipping pet photo")
        return None
    try:
        return storage.upload(
            data, content_type or "application/octet-stream", client_id=client_id
        )
    except PhotoUploadError as exc:
        logger.warning("Pet photo rejected for client %s: %s", client_id, exc)
    except Exception:
        logger.exception("Pet photo upload failed for client %s", client_id)
    return None
