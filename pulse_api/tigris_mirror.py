"""
Tigris/S3-compatible storage implementation of the remote mirror.

Stores articles.json and images/<filename> in an object storage bucket.
"""
import logging
import mimetypes
import os
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from pulse_api.exceptions import MirrorError
from pulse_api.image_utils import decode_image_data
from pulse_api.remote_mirror import DOCUMENT_PATH, RemoteMirror

# Configure logging
logger = logging.getLogger(__name__)


class TigrisMirror(RemoteMirror):
    """Mirror backed by Tigris/S3-compatible object storage."""

    def __init__(
        self,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        bucket_name: Optional[str] = None,
        region: Optional[str] = None,
        public_url: Optional[str] = None,
        s3_client=None
    ):
        """
        Initialize Tigris mirror.

        Args:
            access_key_id: AWS access key ID (defaults to AWS_ACCESS_KEY_ID env var)
            secret_access_key: AWS secret access key (defaults to AWS_SECRET_ACCESS_KEY env var)
            endpoint_url: S3 endpoint URL (defaults to AWS_ENDPOINT_URL_S3 or
                         https://fly.storage.tigris.dev)
            bucket_name: Bucket name (defaults to TIGRIS_BUCKET_NAME env var)
            region: AWS region (defaults to AWS_REGION or 'auto')
            public_url: Public base URL for objects (defaults to the bucket's
                        fly.storage.tigris.dev domain)
            s3_client: Pre-built S3 client, mainly for tests
        """
        self.access_key_id = access_key_id or os.getenv('AWS_ACCESS_KEY_ID')
        self.secret_access_key = secret_access_key or os.getenv('AWS_SECRET_ACCESS_KEY')
        self.endpoint_url = (
            endpoint_url or
            os.getenv('AWS_ENDPOINT_URL_S3', 'https://fly.storage.tigris.dev')
        )
        self.bucket_name = bucket_name or os.getenv('TIGRIS_BUCKET_NAME')
        self.region = region or os.getenv('AWS_REGION', 'auto')

        if not self.bucket_name:
            raise ValueError(
                "Bucket name is required. Set TIGRIS_BUCKET_NAME environment variable "
                "or pass it as a parameter."
            )

        self.public_url = (
            public_url or f"https://{self.bucket_name}.fly.storage.tigris.dev"
        ).rstrip("/")

        if s3_client is None:
            if not self.access_key_id or not self.secret_access_key:
                raise ValueError(
                    "AWS credentials are required. Set AWS_ACCESS_KEY_ID and "
                    "AWS_SECRET_ACCESS_KEY environment variables or pass them as parameters."
                )
            s3_client = boto3.client(
                's3',
                aws_access_key_id=self.access_key_id,
                aws_secret_access_key=self.secret_access_key,
                endpoint_url=self.endpoint_url,
                region_name=self.region
            )
        self.s3_client = s3_client

    def _put(self, key: str, body: bytes, content_type: str) -> None:
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=body,
                ContentType=content_type,
                CacheControl='no-cache, no-store, must-revalidate'
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Tigris write to %s failed: %s", key, e)
            raise MirrorError(f"Tigris write to {key} failed") from e

    def push_document(self, content: bytes, message: str) -> None:
        """Store the articles document as articles.json."""
        self._put(DOCUMENT_PATH, content, 'application/json')
        logger.info("Stored articles in Tigris: %s", message)

    def push_image(self, image_data: str, filename: str) -> str:
        """Store an image under images/<filename> and return its public URL."""
        key = self.image_path(filename)
        content_type = mimetypes.guess_type(filename)[0] or 'application/octet-stream'
        self._put(key, decode_image_data(image_data), content_type)
        logger.info("Uploaded image to Tigris: %s", key)
        return f"{self.public_url}/{key}"
