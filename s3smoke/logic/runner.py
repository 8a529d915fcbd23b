"""Sequential smoke test against an S3-compatible endpoint.

Runs nine steps in a fixed order and records one StepResult per
attempted step. Every step handles its own client errors, so a failing
step never stops the run, with one exception: if the upload fails there
is no object to work with and the remaining steps are skipped.
"""

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Final, TextIO, final

from s3smoke.infrastructure.errors import CLIENT_ERRORS, is_bucket_already_owned
from s3smoke.logic.results import (
    COPY_OBJECT,
    CREATE_BUCKET,
    DELETE_BUCKET,
    DELETE_OBJECTS,
    DOWNLOAD_OBJECT,
    GET_OBJECT_METADATA,
    LIST_BUCKETS,
    LIST_OBJECTS,
    STEP_NAMES,
    UPLOAD_OBJECT,
    StepResult,
)
from s3smoke.logic.summary import exit_code_for, write_summary

logger = logging.getLogger(__name__)

_CONTENT_TYPE: Final = 'text/plain'
_MAX_LISTED_KEYS: Final = 5
_COPY_SUFFIX: Final = '.copy'


@dataclass(frozen=True)
class SampleObject:
    """Object uploaded by the run and verified by later steps."""

    key: str
    content: str

    @property
    def copy_key(self) -> str:
        """Key the copy step writes to."""
        return f'{self.key}{_COPY_SUFFIX}'


def build_sample_object(now: datetime) -> SampleObject:
    """Build a time-stamped object key and content.

    Args:
        now: Timestamp to embed in the key and content.

    Returns:
        SampleObject unique to the second the run started.
    """
    return SampleObject(
        key=f'test-file-{now:%Y%m%d-%H%M%S}.txt',
        content=f'Hello from MinIO! Tested at {now.isoformat(timespec="seconds")}',
    )


def _utc_now() -> datetime:
    return datetime.now(UTC)


@final
class SmokeTestRunner:
    """Run the smoke test steps against one bucket.

    Owns the result log for a run. Results are only ever appended, in
    the order the steps execute.
    """

    def __init__(  # noqa: WPS211
        self,
        client: Any,
        bucket_name: str,
        out: TextIO | None = None,
        bucket_owned: Callable[[Exception], bool] = is_bucket_already_owned,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the runner.

        Args:
            client: boto3 S3 client (or anything with the same methods).
            bucket_name: Bucket to create, use and delete.
            out: Stream for progress output, stdout by default.
            bucket_owned: Predicate deciding whether a create-bucket
                error means the bucket already exists for the caller.
            clock: Source of the timestamp used for the sample object.
        """
        self.client = client
        self.bucket_name = bucket_name
        self.results: list[StepResult] = []
        self._out = out or sys.stdout
        self._bucket_owned = bucket_owned
        self._clock = clock

    def run(self) -> list[StepResult]:
        """Execute all steps in order.

        Returns:
            Results of the attempted steps. Holds three entries when the
            upload fails, nine otherwise.
        """
        self.results = []
        sample = build_sample_object(self._clock())

        self.list_buckets()
        self.create_bucket()
        if not self.put_object(sample):
            self._write('')
            self._write('Skipping remaining tests due to upload failure.')
            logger.warning('Upload failed, skipping remaining steps')
            return self.results

        self.list_objects()
        self.get_object(sample)
        self.head_object(sample)
        self.copy_object(sample)
        self.delete_objects([sample.key, sample.copy_key])
        self.delete_bucket()
        return self.results

    def list_buckets(self) -> None:
        self._start(LIST_BUCKETS)
        try:
            response = self.client.list_buckets()
        except CLIENT_ERRORS as error:
            self._fail(LIST_BUCKETS, error)
            return

        names = [bucket['Name'] for bucket in response.get('Buckets', [])]
        self._pass(
            LIST_BUCKETS,
            f'Success! Found {len(names)} bucket(s): {names}',
        )

    def create_bucket(self) -> None:
        self._start(CREATE_BUCKET, f" '{self.bucket_name}'")
        try:
            self.client.create_bucket(Bucket=self.bucket_name)
        except CLIENT_ERRORS as error:
            if self._bucket_owned(error):
                logger.info('Bucket already exists: %s', self.bucket_name)
                self._pass(
                    CREATE_BUCKET,
                    f"Bucket '{self.bucket_name}' already exists (owned by you)",
                )
                return
            self._fail(CREATE_BUCKET, error)
            return

        self._pass(
            CREATE_BUCKET,
            f"Success! Created bucket '{self.bucket_name}'",
        )

    def put_object(self, sample: SampleObject) -> bool:
        """Upload the sample object.

        Args:
            sample: Object to upload.

        Returns:
            True if the upload succeeded.
        """
        self._start(UPLOAD_OBJECT)
        try:
            self.client.put_object(
                Bucket=self.bucket_name,
                Key=sample.key,
                Body=sample.content.encode(),
                ContentType=_CONTENT_TYPE,
            )
        except CLIENT_ERRORS as error:
            self._fail(UPLOAD_OBJECT, error)
            return False

        self._pass(UPLOAD_OBJECT, f"Success! Uploaded object '{sample.key}'")
        return True

    def list_objects(self) -> None:
        """List the bucket, printing at most five keys."""
        self._start(LIST_OBJECTS, f" in Bucket '{self.bucket_name}'")
        try:
            response = self.client.list_objects_v2(Bucket=self.bucket_name)
        except CLIENT_ERRORS as error:
            self._fail(LIST_OBJECTS, error)
            return

        keys = [entry['Key'] for entry in response.get('Contents', [])]
        lines = [f'Success! Found {len(keys)} object(s):']
        lines.extend(f'  - {key}' for key in keys[:_MAX_LISTED_KEYS])
        if len(keys) > _MAX_LISTED_KEYS:
            lines.append(f'  ... and {len(keys) - _MAX_LISTED_KEYS} more')
        self._pass(LIST_OBJECTS, *lines)

    def get_object(self, sample: SampleObject) -> None:
        """Download the sample object and compare it with what was sent.

        Args:
            sample: Object uploaded earlier in the run.
        """
        self._start(DOWNLOAD_OBJECT, f" '{sample.key}'")
        try:
            response = self.client.get_object(
                Bucket=self.bucket_name,
                Key=sample.key,
            )
        except CLIENT_ERRORS as error:
            self._fail(DOWNLOAD_OBJECT, error)
            return

        body = response['Body']
        try:
            downloaded = body.read()
        except CLIENT_ERRORS as error:
            self._fail(DOWNLOAD_OBJECT, error, reason='Failed to read body')
            return
        finally:
            body.close()

        text = downloaded.decode(errors='replace')
        if downloaded != sample.content.encode():
            logger.warning(
                'Content mismatch for %s: expected %d bytes, got %d',
                sample.key,
                len(sample.content.encode()),
                len(downloaded),
            )
            self._write('✗ Content mismatch!')
            self._write(f'  Expected: {sample.content}')
            self._write(f'  Got: {text}')
            self._write('')
            self._record(DOWNLOAD_OBJECT, passed=False)
            return

        self._pass(
            DOWNLOAD_OBJECT,
            'Success! Downloaded and verified content:',
            f'  Content: {text}',
        )

    def head_object(self, sample: SampleObject) -> None:
        """Fetch object metadata, printing only the fields present.

        Args:
            sample: Object uploaded earlier in the run.
        """
        self._start(GET_OBJECT_METADATA, f" '{sample.key}'")
        try:
            response = self.client.head_object(
                Bucket=self.bucket_name,
                Key=sample.key,
            )
        except CLIENT_ERRORS as error:
            self._fail(GET_OBJECT_METADATA, error)
            return

        lines = ['Success! Object metadata:']
        if response.get('ContentType') is not None:
            lines.append(f'  Content-Type: {response["ContentType"]}')
        if response.get('ContentLength') is not None:
            lines.append(f'  Content-Length: {response["ContentLength"]} bytes')
        if response.get('LastModified') is not None:
            lines.append(
                f'  Last-Modified: {response["LastModified"].isoformat()}',
            )
        if response.get('ETag') is not None:
            lines.append(f'  ETag: {response["ETag"]}')
        self._pass(GET_OBJECT_METADATA, *lines)

    def copy_object(self, sample: SampleObject) -> None:
        self._start(COPY_OBJECT)
        try:
            self.client.copy_object(
                Bucket=self.bucket_name,
                CopySource=f'{self.bucket_name}/{sample.key}',
                Key=sample.copy_key,
            )
        except CLIENT_ERRORS as error:
            self._fail(COPY_OBJECT, error)
            return

        self._pass(
            COPY_OBJECT,
            f"Success! Copied '{sample.key}' to '{sample.copy_key}'",
        )

    def delete_objects(self, keys: list[str]) -> None:
        """Delete all keys in one request.

        Args:
            keys: Object keys to delete.
        """
        self._start(DELETE_OBJECTS)
        try:
            response = self.client.delete_objects(
                Bucket=self.bucket_name,
                Delete={'Objects': [{'Key': key} for key in keys]},
            )
        except CLIENT_ERRORS as error:
            self._fail(DELETE_OBJECTS, error)
            return

        # Per-key failures come back in the body, not as an exception
        errors = response.get('Errors', [])
        if errors:
            details = '; '.join(
                f'{entry.get("Key")}: {entry.get("Code")}' for entry in errors
            )
            self._fail(DELETE_OBJECTS, details, reason='Failed to delete')
            return

        self._pass(DELETE_OBJECTS, 'Success! Deleted test objects')

    def delete_bucket(self) -> None:
        self._start(DELETE_BUCKET, f" '{self.bucket_name}'")
        try:
            self.client.delete_bucket(Bucket=self.bucket_name)
        except CLIENT_ERRORS as error:
            self._fail(DELETE_BUCKET, error)
            return

        self._pass(
            DELETE_BUCKET,
            f"Success! Deleted bucket '{self.bucket_name}'",
        )

    def _start(self, name: str, detail: str = '') -> None:
        number = STEP_NAMES.index(name) + 1
        logger.info('Running step %d: %s', number, name)
        self._write(f'Test {number}: {name}{detail}')

    def _pass(self, name: str, *lines: str) -> None:
        first, *rest = lines
        self._write(f'✓ {first}')
        for line in rest:
            self._write(line)
        self._write('')
        self._record(name, passed=True)

    def _fail(
        self,
        name: str,
        error: Exception | str,
        reason: str = 'Failed',
    ) -> None:
        logger.warning('Step %s failed: %s', name, error)
        if isinstance(error, Exception):
            logger.debug('Step %s traceback', name, exc_info=error)
        self._write(f'✗ {reason}: {error}')
        self._write('')
        self._record(name, passed=False)

    def _record(self, name: str, *, passed: bool) -> None:
        self.results.append(StepResult(name=name, passed=passed))

    def _write(self, line: str) -> None:
        self._out.write(f'{line}\n')


def run_smoke_test(
    client: Any,
    bucket_name: str,
    out: TextIO | None = None,
) -> tuple[list[StepResult], int]:
    """Run every step, print the summary and pick an exit code.

    Args:
        client: boto3 S3 client.
        bucket_name: Bucket to exercise.
        out: Stream for progress output, stdout by default.

    Returns:
        Recorded results and the process exit code (0 or 1).
    """
    stream = out or sys.stdout
    runner = SmokeTestRunner(client, bucket_name, out=stream)
    results = runner.run()
    write_summary(results, stream)
    return results, exit_code_for(results)
