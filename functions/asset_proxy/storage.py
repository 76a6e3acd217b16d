import logging
from typing import Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from asset_proxy.exceptions import StorageError

logger = logging.getLogger(__name__)


class AssetStore(Protocol):
    def put(self, key: str, body: bytes, content_type: str) -> None: ...

    def delete(self, key: str) -> None: ...


def create_s3_client(settings):
    if settings.endpoint_url:
        return boto3.client("s3", endpoint_url=settings.endpoint_url)
    return boto3.client("s3")


class S3AssetStore:
    """Puts and deletes objects under a fixed prefix of one bucket.

    The boto3 client is created once per process and shared by every
    invocation.
    """

    def __init__(self, client, bucket_name, prefix="assets/"):
        self._client = client
        self.bucket_name = bucket_name
        self.prefix = prefix

    def object_key(self, key):
        return f"{self.prefix}{key}"

    def put(self, key, body, content_type):
        logger.info("uploading %s to %s", key, self.bucket_name)
        try:
            self._client.put_object(
                Bucket=self.bucket_name,
                Key=self.object_key(key),
                Body=body,
                ContentType=content_type
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("couldn't upload %s to %s: %s", key, self.bucket_name, e)
            raise StorageError(f"put {key} failed") from e

    def delete(self, key):
        try:
            self._client.delete_object(
                Bucket=self.bucket_name,
                Key=self.object_key(key)
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("couldn't delete %s from %s: %s", key, self.bucket_name, e)
            raise StorageError(f"delete {key} failed") from e

        logger.info("deleted %s", key)
