"""S3 storage backend with presigned download URLs."""

from __future__ import annotations

from uuid import uuid4

import boto3
from botocore.exceptions import ClientError

from shared.config.settings import settings
from shared.config.logging import get_logger
from shared.utils.validators import safe_file_name

from . import DISH_PREFIX

logger = get_logger(__name__)


class S3Backend:
    def __init__(self, client=None) -> None:
        self.bucket = settings.s3_bucket
        self.expiry = settings.s3_url_expiry
        self.client = client or boto3.client(
            "s3",
            endpoint_url=settings.s3_endpoint_url or None,
            region_name=settings.s3_region,
            aws_access_key_id=settings.s3_access_key_id or None,
            aws_secret_access_key=settings.s3_secret_access_key or None,
        )

    @staticmethod
    def _key(file_name: str) -> str:
        return f"{DISH_PREFIX}/{file_name}"

    def save(self, file_name: str, data: bytes, content_type: str | None) -> str:
        stored = f"{uuid4().hex}_{safe_file_name(file_name)}"
        self.client.put_object(
            Bucket=self.bucket,
            Key=self._key(stored),
            Body=data,
            ContentType=content_type or "application/octet-stream",
            CacheControl="public, max-age=86400",
        )
        logger.info("Image uploaded", bucket=self.bucket, file_name=stored, size=len(data))
        return stored

    def exists(self, file_name: str) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket, Key=self._key(file_name))
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                return False
            raise
        return True

    def url(self, file_name: str) -> str:
        return self.client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.bucket, "Key": self._key(file_name)},
            ExpiresIn=self.expiry,
        )
