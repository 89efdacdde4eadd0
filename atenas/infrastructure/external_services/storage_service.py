"""Storage service using MinIO"""

import logging
import re
import time
from io import BytesIO
from typing import BinaryIO, Optional, Union

from minio import Minio
from minio.error import S3Error

from ...core.config import settings

logger = logging.getLogger(__name__)


def safe_filename(filename: str) -> str:
    """Keep letters, digits, dots, dashes and underscores"""
    name = re.sub(r"[^A-Za-z0-9._-]", "_", filename or "file")
    return name.strip("._") or "file"


def timestamped_path(prefix: str, filename: str) -> str:
    return f"{prefix.rstrip('/')}/{int(time.time() * 1000)}-{safe_filename(filename)}"


def public_object_url(object_name: str, bucket: str) -> str:
    return f"{settings.minio_public_base}/{bucket}/{object_name}"


class StorageService:

    def __init__(self):
        self.client = Minio(
            endpoint=settings.MINIO_ENDPOINT,
            access_key=settings.MINIO_ACCESS_KEY,
            secret_key=settings.MINIO_SECRET_KEY,
            secure=settings.MINIO_SECURE
        )
        self.bucket = settings.MINIO_BUCKET_NAME
        self._ready_buckets = set()

    def _ensure_bucket_exists(self, bucket: str) -> None:
        if bucket in self._ready_buckets:
            return
        if not self.client.bucket_exists(bucket):
            self.client.make_bucket(bucket)
        self._ready_buckets.add(bucket)

    def public_url(self, object_name: str, bucket: Optional[str] = None) -> str:
        return public_object_url(object_name, bucket or self.bucket)

    async def upload_file(
        self,
        file_data: Union[BinaryIO, bytes],
        object_name: str,
        content_type: str,
        bucket: Optional[str] = None,
    ) -> str:
        """Upload under object_name and return its public URL"""
        bucket = bucket or self.bucket
        if isinstance(file_data, bytes):
            file_stream = BytesIO(file_data)
            file_size = len(file_data)
        else:
            file_stream = file_data
            file_stream.seek(0, 2)
            file_size = file_stream.tell()
            file_stream.seek(0)

        try:
            self._ensure_bucket_exists(bucket)
            self.client.put_object(
                bucket_name=bucket,
                object_name=object_name,
                data=file_stream,
                length=file_size,
                content_type=content_type
            )
        except S3Error as e:
            logger.error("Upload of %s/%s failed: %s", bucket, object_name, e)
            raise RuntimeError(f"Failed to upload file: {e}") from e
        return self.public_url(object_name, bucket)

    async def delete_file(self, object_name: str, bucket: Optional[str] = None) -> bool:
        """Delete by object name or public URL"""
        bucket = bucket or self.bucket
        prefix = f"{settings.minio_public_base}/{bucket}/"
        if object_name.startswith(prefix):
            object_name = object_name[len(prefix):]
        try:
            self.client.remove_object(bucket, object_name)
            return True
        except S3Error as e:
            logger.warning("Delete of %s/%s failed: %s", bucket, object_name, e)
            return False
