"""Helpers for inspecting errors raised by the S3 client."""

from typing import Final

from botocore.exceptions import BotoCoreError, ClientError

# Errors the client raises for failed requests of any kind
CLIENT_ERRORS: Final = (ClientError, BotoCoreError)

_BUCKET_OWNED_MARKERS: Final = (
    'BucketAlreadyOwnedByYou',
    'BucketAlreadyExists',
)


def is_bucket_already_owned(error: Exception) -> bool:
    """Check whether a create-bucket failure means the bucket exists.

    Matches on the error text, so it works for any client that
    includes the S3 error code in its message.

    Args:
        error: Exception raised by the create-bucket call.

    Returns:
        True if the message names one of the "already exists" codes.
    """
    message = str(error)
    return any(marker in message for marker in _BUCKET_OWNED_MARKERS)
