"""Amazon S3 implementation of the object-store abstraction."""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from bill_ingest.config import settings
from bill_ingest.errors import ObjectNotFoundError, ObjectStoreError
from bill_ingest.storage.base import ListPage, ObjectRef, ObjectStore

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


class S3ObjectStore(ObjectStore):
    """S3-backed object store.

    Credentials are resolved by boto3's default chain (environment
    variables, shared config, instance profile).

    Parameters
    ----------
    bucket:
        Bucket every call is scoped to.
    client:
        Pre-built ``boto3`` S3 client.  When *None*, one is created from
        *region* and *endpoint_url*.
    region:
        AWS region of the bucket.
    endpoint_url:
        Override for S3-compatible stores; empty means AWS.
    page_size:
        ``MaxKeys`` requested per listing page.
    """

    def __init__(
        self,
        bucket: str = settings.s3_bucket,
        *,
        client: Any = None,
        region: str = settings.aws_region,
        endpoint_url: str = settings.s3_endpoint_url,
        page_size: int = 1000,
    ) -> None:
        super().__init__(bucket)
        if client is None:
            client = boto3.client("s3", region_name=region, endpoint_url=endpoint_url or None)
        self._client = client
        self._page_size = page_size

    # -- ObjectStore overrides ------------------------------------------------

    def list_page(self, prefix: str, continuation_token: str | None = None) -> ListPage:
        params: dict[str, Any] = {
            "Bucket": self.bucket,
            "Prefix": prefix,
            "MaxKeys": self._page_size,
        }
        if continuation_token:
            params["ContinuationToken"] = continuation_token

        try:
            response = self._client.list_objects_v2(**params)
        except (ClientError, BotoCoreError) as exc:
            raise ObjectStoreError(
                f"Listing s3://{self.bucket}/{prefix} failed: {exc}"
            ) from exc

        entries = [
            ObjectRef(
                key=obj["Key"],
                size=obj.get("Size"),
                last_modified=obj.get("LastModified"),
                etag=obj.get("ETag"),
            )
            for obj in response.get("Contents", [])
            if obj.get("Key")
        ]
        next_token = response.get("NextContinuationToken") if response.get("IsTruncated") else None
        logger.debug(
            "Listed %d objects under s3://%s/%s (more=%s)",
            len(entries), self.bucket, prefix, next_token is not None,
        )
        return ListPage(entries=entries, next_token=next_token)

    def get_object(self, key: str) -> bytes:
        try:
            response = self._client.get_object(Bucket=self.bucket, Key=key)
            return response["Body"].read()
        except ClientError as exc:
            if _error_code(exc) in _NOT_FOUND_CODES:
                raise ObjectNotFoundError(f"s3://{self.bucket}/{key} does not exist") from exc
            raise ObjectStoreError(f"Fetching s3://{self.bucket}/{key} failed: {exc}") from exc
        except BotoCoreError as exc:
            raise ObjectStoreError(f"Fetching s3://{self.bucket}/{key} failed: {exc}") from exc
