"""Exceptions for the S3 smoke test harness."""


class S3SmokeError(Exception):
    """Base error for the smoke test harness."""


class MissingSettingError(S3SmokeError):
    """Raised when required connection settings are not configured."""

    def __init__(self, missing: list[str]) -> None:
        """Initialize MissingSettingError.

        Args:
            missing: Names of the settings that could not be resolved.
        """
        self.missing = missing
        super().__init__(
            f'Missing required settings: {", ".join(missing)}',
        )


class ClientInitError(S3SmokeError):
    """Raised when the S3 client cannot be constructed."""
