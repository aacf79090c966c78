"""File-system backed stand-in for the S3 bucket holding pet photos.

Keys map to paths below ``<root>/<bucket>``; URLs are built against the
configured endpoint so a CDN or real bucket can serve the same keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from petcode.core.config import Settings


class S3ClientError(RuntimeError):
    """Raised when storage operations fail."""


@dataclass
class StoredObject:
    """Metadata recorded for an object written through this client."""

    key: str
    size: int
    content_type: str
    cache_control: str | None = None
    tags: dict[str, str] = field(default_factory=dict)


class S3Client:
    """Minimal put/exists/url facade over a local directory."""

    def __init__(
        self,
        bucket: str,
        *,
        endpoint_url: str | None = None,
        root: Path | None = None,
        default_cache_seconds: int = 0,
    ) -> None:
        if not bucket:
            raise S3ClientError("S3 bucket is not configured")
        self.bucket = bucket
        self._endpoint_url = endpoint_url.rstrip("/") if endpoint_url else None
        self._bucket_dir = (root or Path.cwd() / ".storage") / bucket
        try:
            self._bucket_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise S3ClientError(f"Storage root {self._bucket_dir} is unusable") from exc
        self._default_cache_seconds = default_cache_seconds
        self._metadata: dict[str, StoredObject] = {}

    @staticmethod
    def _clean_key(key: str) -> str:
        parts = PurePosixPath(key.lstrip("/")).parts
        if not parts or any(part in {".", ".."} for part in parts):
            raise S3ClientError(f"Invalid storage key: {key!r}")
        return "/".join(parts)

    def _path(self, key: str) -> Path:
        return self._bucket_dir / self._clean_key(key)

    def exists(self, key: str) -> bool:
        return self._path(key).is_file()

    def put_object_with_cache(
        self,
        key: str,
        data: bytes,
        *,
        content_type: str,
        cache_seconds: int | None = None,
        tags: dict[str, str] | None = None,
    ) -> StoredObject:
        """Write ``data`` under ``key`` and remember its cache and tag metadata."""
        clean = self._clean_key(key)
        path = self._bucket_dir / clean
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise S3ClientError(f"Unable to write object {clean}") from exc

        max_age = cache_seconds or self._default_cache_seconds
        stored = StoredObject(
            key=clean,
            size=len(data),
            content_type=content_type,
            cache_control=f"public, max-age={max_age}, immutable" if max_age > 0 else None,
            tags=dict(tags or {}),
        )
        self._metadata[clean] = stored
        return stored

    def get_object_metadata(self, key: str) -> StoredObject | None:
        return self._metadata.get(self._clean_key(key))

    def build_object_url(self, key: str) -> str:
        clean = self._clean_key(key)
        if self._endpoint_url:
            return f"{self._endpoint_url}/{self.bucket}/{clean}"
        return f"/{self.bucket}/{clean}"


def build_s3_client(settings: "Settings", **overrides: object) -> S3Client:
    """Build the client from settings; ``overrides`` replace individual values."""
    bucket = overrides.get("bucket") or settings.s3_bucket
    if not bucket:
        raise S3ClientError("S3 bucket is not configured")
    root = overrides.get("root") or settings.s3_storage_root
    endpoint = overrides.get("endpoint_url") or settings.s3_endpoint_url
    return S3Client(
        str(bucket),
        endpoint_url=str(endpoint) if endpoint else None,
        root=Path(str(root)) if root else None,
        default_cache_seconds=settings.s3_cache_seconds,
    )
