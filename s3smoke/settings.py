"""Connection settings for the smoke test.

Settings come from positional command line arguments when all three
required values are given. Otherwise they are read with python-decouple,
which checks the process environment first and then a ``.env`` or
``settings.ini`` file.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from decouple import config

from s3smoke.exceptions import MissingSettingError

DEFAULT_BUCKET_NAME: Final = 'sdk-test-bucket-go'
DEFAULT_REGION_NAME: Final = 'us-east-1'

ENDPOINT_VAR: Final = 'MINIO_ENDPOINT'
ACCESS_KEY_VAR: Final = 'MINIO_ACCESS_KEY'
SECRET_KEY_VAR: Final = 'MINIO_SECRET_KEY'
BUCKET_VAR: Final = 'MINIO_TEST_BUCKET'
REGION_VAR: Final = 'MINIO_REGION'

# endpoint, access key, secret key
_REQUIRED_POSITIONALS: Final = 3


@dataclass(frozen=True)
class ConnectionSettings:
    """Everything needed to reach the storage endpoint."""

    endpoint_url: str
    access_key: str
    secret_key: str
    bucket_name: str = DEFAULT_BUCKET_NAME
    region_name: str = DEFAULT_REGION_NAME


def resolve_settings(positionals: Sequence[str | None]) -> ConnectionSettings:
    """Resolve connection settings from arguments or configuration.

    Args:
        positionals: Positional values in order endpoint, access key,
            secret key and bucket name. Missing trailing values may be
            omitted or ``None``.

    Returns:
        Resolved ConnectionSettings.

    Raises:
        MissingSettingError: If endpoint, access key or secret key is
            empty after resolution.
    """
    # An empty argument still occupies its slot
    supplied = [value for value in positionals if value is not None]

    if len(supplied) >= _REQUIRED_POSITIONALS:
        endpoint_url, access_key, secret_key = supplied[:_REQUIRED_POSITIONALS]
        bucket_name = supplied[3] if len(supplied) > 3 else ''
    else:
        endpoint_url = config(ENDPOINT_VAR, default='')
        access_key = config(ACCESS_KEY_VAR, default='')
        secret_key = config(SECRET_KEY_VAR, default='')
        bucket_name = config(BUCKET_VAR, default='')

    missing = [
        name
        for name, value in (
            (ENDPOINT_VAR, endpoint_url),
            (ACCESS_KEY_VAR, access_key),
            (SECRET_KEY_VAR, secret_key),
        )
        if not value
    ]
    if missing:
        raise MissingSettingError(missing)

    return ConnectionSettings(
        endpoint_url=endpoint_url,
        access_key=access_key,
        secret_key=secret_key,
        bucket_name=bucket_name or DEFAULT_BUCKET_NAME,
        region_name=config(REGION_VAR, default=DEFAULT_REGION_NAME),
    )
