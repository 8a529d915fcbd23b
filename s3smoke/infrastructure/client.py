"""S3 client construction for S3-compatible endpoints."""

import logging
from typing import Final

import boto3
from botocore.client import BaseClient
from botocore.config import Config
from botocore.exceptions import BotoCoreError

from s3smoke.exceptions import ClientInitError
from s3smoke.settings import ConnectionSettings

logger = logging.getLogger(__name__)

# MinIO serves buckets under the URL path, not as subdomains
_ADDRESSING_STYLE: Final = 'path'


def create_s3_client(settings: ConnectionSettings) -> BaseClient:
    """Create a boto3 S3 client for the configured endpoint.

    Args:
        settings: Resolved connection settings.

    Returns:
        boto3 S3 client using static credentials and path-style
        addressing.

    Raises:
        ClientInitError: If boto3 rejects the configuration.
    """
    logger.info(
        'Creating S3 client for %s (region %s)',
        settings.endpoint_url,
        settings.region_name,
    )
    try:
        return boto3.client(
            's3',
            endpoint_url=settings.endpoint_url,
            aws_access_key_id=settings.access_key,
            aws_secret_access_key=settings.secret_key,
            region_name=settings.region_name,
            config=Config(s3={'addressing_style': _ADDRESSING_STYLE}),
        )
    except (BotoCoreError, ValueError) as error:
        logger.debug(
            'Failed to create S3 client: %s',
            settings.endpoint_url,
            exc_info=True,
        )
        raise ClientInitError(str(error)) from error
