"""Banner and summary output for a smoke test run."""

from typing import Final, TextIO

from s3smoke.logic.results import StepResult, count_passed

_RULE: Final = '=' * 60
_TITLE: Final = 'MinIO S3 Compatibility Test using boto3'


def write_banner(
    out: TextIO,
    endpoint_url: str,
    access_key: str,
    bucket_name: str,
) -> None:
    """Write the header shown before the steps run.

    Args:
        out: Destination stream.
        endpoint_url: Endpoint under test.
        access_key: Access key in use. The secret key is never shown.
        bucket_name: Bucket the run creates and deletes.
    """
    lines = [
        _RULE,
        _TITLE,
        _RULE,
        f'Endpoint: {endpoint_url}',
        f'Access Key: {access_key}',
        f'Bucket: {bucket_name}',
        _RULE,
        '',
    ]
    out.write('\n'.join(lines) + '\n')


def exit_code_for(results: list[StepResult]) -> int:
    """Pick the process exit code for a run.

    Args:
        results: Recorded step results.

    Returns:
        0 if at least one step ran and every step passed, otherwise 1.
    """
    if results and count_passed(results) == len(results):
        return 0
    return 1


def write_summary(results: list[StepResult], out: TextIO) -> None:
    """Write the pass/fail table and totals.

    Args:
        results: Recorded step results, in execution order.
        out: Destination stream.
    """
    passed = count_passed(results)
    total = len(results)

    lines = [_RULE, 'TEST SUMMARY', _RULE]
    for result in results:
        status = '✓ PASS' if result.passed else '✗ FAIL'
        lines.append(f'{status}: {result.name}')
    lines.extend([
        _RULE,
        f'Results: {passed}/{total} tests passed',
        _RULE,
        '',
    ])

    if exit_code_for(results) == 0:
        lines.append(
            '🎉 All tests passed! MinIO is working correctly with boto3',
        )
    else:
        lines.append(f'⚠️  {total - passed} test(s) failed')
    out.write('\n'.join(lines) + '\n')
