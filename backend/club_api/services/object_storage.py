"""ObjectStorage: uploads images to S3 and returns their public URL.

boto3 is synchronous, so put_object runs in asyncio.to_thread().
Key layout: {prefix}/{epoch_ms}-{sanitised filename}
"""

import asyncio
import re
import time

import boto3
import structlog

from club_api.core.config import Settings
from club_api.core.exceptions import StorageError

logger = structlog.get_logger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def build_object_key(prefix: str, filename: str, now_ms: int | None = None) -> str:
    """Generate a collision-resistant key for an uploaded file."""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    safe_name = _UNSAFE_KEY_CHARS.sub("-", filename or "upload").strip("-") or "upload"
    return f"{prefix.strip('/')}/{stamp}-{safe_name}"


class ObjectStorage:
    def __init__(self, bucket: str, region: str, public_base_url: str = "", key_prefix: str = "uploads") -> None:
        self._bucket = bucket
        self._region = region
        self._public_base_url = public_base_url.rstrip("/")
        self._key_prefix = key_prefix
        self._client = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ObjectStorage":
        return cls(
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            public_base_url=settings.s3_public_base_url,
            key_prefix=settings.s3_key_prefix,
        )

    def _get_client(self):
        # Credentials come from the standard AWS chain (env, profile, instance role)
        if self._client is None:
            self._client = boto3.client("s3", region_name=self._region)
        return self._client

    def public_url(self, key: str) -> str:
        if self._public_base_url:
            return f"{self._public_base_url}/{key}"
        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"

    async def upload(self, data: bytes, filename: str, content_type: str | None = None) -> str:
        """Store the blob and return its public URL.

        Raises StorageError when no bucket is configured or the upload fails.
        """
        if not self._bucket:
            raise StorageError("File storage is not configured")

        key = build_object_key(self._key_prefix, filename)
        params = {"Bucket": self._bucket, "Key": key, "Body": data}
        if content_type:
            params["ContentType"] = content_type

        try:
            await asyncio.to_thread(self._get_client().put_object, **params)
        except Exception as exc:
            logger.warning(
                "s3_upload_failed",
                key=key,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise StorageError(str(exc)) from exc

        logger.info("s3_upload_complete", key=key, size_bytes=len(data))
        return self.public_url(key)
