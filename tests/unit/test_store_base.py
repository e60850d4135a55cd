"""
Base test fixtures and helpers for article store tests.

Provides common test patterns for both local disk and Tigris stores.
"""
import os
import shutil
import tempfile
from unittest.mock import Mock, MagicMock

import pytest


class BaseLocalDiskStoreTests:
    """Base test class for local disk stores."""

    @pytest.fixture
    def temp_articles_dir(self):
        """Create a temporary articles directory."""
        temp_dir = tempfile.mkdtemp()
        articles_dir = os.path.join(temp_dir, "articles")
        os.makedirs(articles_dir, exist_ok=True)
        yield articles_dir
        shutil.rmtree(temp_dir)


class BaseTigrisStoreTests:
    """Base test class for Tigris stores."""

    @pytest.fixture
    def mock_s3_client(self):
        """Create a mock boto3 S3 client."""
        mock_client = MagicMock()
        return mock_client

    def setup_mock_get_object(self, mock_s3_client, text):
        """
        Helper to setup mock get_object response.

        Args:
            mock_s3_client: Mock S3 client
            text: Text (or raw bytes) to return from get_object
        """
        mock_body = Mock()
        mock_body.read.return_value = text if isinstance(text, bytes) else text.encode('utf-8')
        mock_s3_client.get_object.return_value = {"Body": mock_body}

    def setup_mock_no_such_key(self, mock_s3_client):
        """
        Helper to setup mock NoSuchKey / 404 errors for reads and head requests.

        Args:
            mock_s3_client: Mock S3 client
        """
        from botocore.exceptions import ClientError
        mock_s3_client.get_object.side_effect = ClientError(
            {'Error': {'Code': 'NoSuchKey'}}, 'GetObject'
        )
        mock_s3_client.head_object.side_effect = ClientError(
            {'Error': {'Code': '404'}}, 'HeadObject'
        )

    def setup_mock_list(self, mock_s3_client, keys):
        """
        Helper to setup mock list_objects_v2 pagination.

        Args:
            mock_s3_client: Mock S3 client
            keys: Object keys to return in a single page
        """
        paginator = MagicMock()
        paginator.paginate.return_value = [{"Contents": [{"Key": k} for k in keys]}]
        mock_s3_client.get_paginator.return_value = paginator
