import logging
from datetime import timedelta

from minio import Minio, S3Error

from portal.configs.settings import Settings
from portal.errors import InfrastructureError

logger = logging.getLogger(__name__)


def make_client(settings: Settings) -> Minio:
    if not settings.STORAGE_ENDPOINT:
        raise InfrastructureError("File storage is not configured")
    return Minio(
        settings.STORAGE_ENDPOINT,
        access_key=settings.STORAGE_ACCESS_KEY,
        secret_key=settings.STORAGE_SECRET_KEY,
        secure=settings.STORAGE_SECURE,
        region=settings.STORAGE_REGION,
    )


def make_upload_url(settings: Settings, object_name: str, expires: int = 3600) -> str:
    client = make_client(settings)
    try:
        return client.presigned_put_object(settings.STORAGE_BUCKET, object_name, expires=timedelta(seconds=expires))
    except S3Error as e:
        logger.error(f"MinIO upload URL error: {e}")
        raise InfrastructureError(f"MinIO upload URL error: {str(e)}") from e
