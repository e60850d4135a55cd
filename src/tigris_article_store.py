"""
Tigris/S3-compatible storage implementation of article storage.

Stores one object per article in an S3-compatible bucket, so several
server instances can share the same articles.
Default object key: articles/<id>.md
"""
import logging
import os
from typing import List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.article_store import (
    ARTICLE_EXTENSION,
    ArticleStore,
    filename_to_id,
    id_to_filename,
    validate_article_id,
)
from src.errors import ArticleIOError, ArticleNotFoundError, InvalidArticleIdError

logger = logging.getLogger(__name__)

_MISSING_CODES = ("NoSuchKey", "404", "NotFound")


def _is_missing(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") in _MISSING_CODES


class TigrisArticleStore(ArticleStore):
    """
    Tigris/S3-compatible storage implementation of article storage.

    Objects are stored under a key prefix, one object per article.
    """

    def __init__(
        self,
        prefix: str = "articles/",
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        bucket_name: Optional[str] = None,
        region: Optional[str] = None
    ):
        """
        Initialize Tigris store.

        Args:
            prefix: Object key prefix for article objects (default: "articles/")
            access_key_id: AWS access key ID (defaults to AWS_ACCESS_KEY_ID env var)
            secret_access_key: AWS secret access key (defaults to AWS_SECRET_ACCESS_KEY env var)
            endpoint_url: S3 endpoint URL (defaults to AWS_ENDPOINT_URL_S3 or
                         https://fly.storage.tigris.dev)
            bucket_name: S3 bucket name (defaults to TIGRIS_BUCKET_NAME env var)
            region: AWS region (defaults to AWS_REGION or 'auto')
        """
        if prefix and not prefix.endswith("/"):
            prefix += "/"
        self.prefix = prefix

        self.access_key_id = access_key_id or os.getenv('AWS_ACCESS_KEY_ID')
        self.secret_access_key = secret_access_key or os.getenv('AWS_SECRET_ACCESS_KEY')
        self.endpoint_url = (
            endpoint_url or
            os.getenv('AWS_ENDPOINT_URL_S3', 'https://fly.storage.tigris.dev')
        )
        self.bucket_name = bucket_name or os.getenv('TIGRIS_BUCKET_NAME')
        self.region = region or os.getenv('AWS_REGION', 'auto')

        if not self.access_key_id or not self.secret_access_key:
            raise ValueError(
                "AWS credentials are required. Set AWS_ACCESS_KEY_ID and "
                "AWS_SECRET_ACCESS_KEY environment variables or pass them as parameters."
            )
        if not self.bucket_name:
            raise ValueError(
                "Bucket name is required. Set TIGRIS_BUCKET_NAME environment variable "
                "or pass it as a parameter."
            )

        self.s3_client = boto3.client(
            's3',
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            endpoint_url=self.endpoint_url,
            region_name=self.region
        )

    def _get_object_key(self, article_id: str) -> str:
        """Get the S3 object key for an article."""
        return f"{self.prefix}{id_to_filename(article_id)}"

    def ensure(self) -> None:
        """Buckets are provisioned out of band; prefixes need no creation."""

    def list_ids(self) -> List[str]:
        """List article ids from the objects directly under the prefix."""
        ids = []
        try:
            paginator = self.s3_client.get_paginator('list_objects_v2')
            for page in paginator.paginate(Bucket=self.bucket_name, Prefix=self.prefix):
                for obj in page.get('Contents', []):
                    name = obj['Key'][len(self.prefix):]
                    if "/" in name or name.startswith(".") or not name.endswith(ARTICLE_EXTENSION):
                        continue
                    try:
                        ids.append(validate_article_id(filename_to_id(name)))
                    except InvalidArticleIdError:
                        logger.warning("Ignoring object with unusable article id: %s", obj['Key'])
        except (ClientError, BotoCoreError) as e:
            raise ArticleIOError(f"Cannot list articles in bucket {self.bucket_name}: {e}") from e
        return sorted(ids)

    def read(self, article_id: str) -> str:
        """Read an article object as UTF-8 text."""
        key = self._get_object_key(article_id)
        try:
            response = self.s3_client.get_object(Bucket=self.bucket_name, Key=key)
            content = response['Body'].read()
        except ClientError as e:
            if _is_missing(e):
                raise ArticleNotFoundError(article_id) from e
            raise ArticleIOError(f"Cannot read article {article_id}: {e}") from e
        except BotoCoreError as e:
            raise ArticleIOError(f"Cannot read article {article_id}: {e}") from e

        try:
            return content.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ArticleIOError(f"Article {article_id} is not valid UTF-8: {e}") from e

    def write(self, article_id: str, text: str) -> None:
        """Create or replace an article object."""
        key = self._get_object_key(article_id)
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=text.encode('utf-8'),
                ContentType='text/markdown; charset=utf-8',
                CacheControl='no-cache, no-store, must-revalidate'
            )
        except (ClientError, BotoCoreError) as e:
            raise ArticleIOError(f"Cannot write article {article_id}: {e}") from e
        logger.debug("Wrote article %s to s3://%s/%s", article_id, self.bucket_name, key)

    def delete(self, article_id: str) -> bool:
        """Delete an article object. Returns False if it did not exist."""
        if not self.exists(article_id):
            return False
        try:
            self.s3_client.delete_object(
                Bucket=self.bucket_name,
                Key=self._get_object_key(article_id)
            )
        except (ClientError, BotoCoreError) as e:
            raise ArticleIOError(f"Cannot delete article {article_id}: {e}") from e
        return True

    def exists(self, article_id: str) -> bool:
        """Check whether an article object exists."""
        try:
            self.s3_client.head_object(
                Bucket=self.bucket_name,
                Key=self._get_object_key(article_id)
            )
        except ClientError as e:
            if _is_missing(e):
                return False
            raise ArticleIOError(f"Cannot check article {article_id}: {e}") from e
        except BotoCoreError as e:
            raise ArticleIOError(f"Cannot check article {article_id}: {e}") from e
        return True
