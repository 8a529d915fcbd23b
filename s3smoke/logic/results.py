"""Step results and step names."""

from dataclasses import dataclass
from typing import Final

LIST_BUCKETS: Final = 'List Buckets'
CREATE_BUCKET: Final = 'Create Bucket'
UPLOAD_OBJECT: Final = 'Upload Object'
LIST_OBJECTS: Final = 'List Objects'
DOWNLOAD_OBJECT: Final = 'Download Object'
GET_OBJECT_METADATA: Final = 'Get Object Metadata'
COPY_OBJECT: Final = 'Copy Object'
DELETE_OBJECTS: Final = 'Delete Objects'
DELETE_BUCKET: Final = 'Delete Bucket'

# Execution order
STEP_NAMES: Final = (
    LIST_BUCKETS,
    CREATE_BUCKET,
    UPLOAD_OBJECT,
    LIST_OBJECTS,
    DOWNLOAD_OBJECT,
    GET_OBJECT_METADATA,
    COPY_OBJECT,
    DELETE_OBJECTS,
    DELETE_BUCKET,
)


@dataclass(frozen=True)
class StepResult:
    name: str
    passed: bool


def count_passed(results: list[StepResult]) -> int:
    """Count results that passed.

    Args:
        results: Recorded step results.

    Returns:
        Number of passing results.
    """
    return sum(1 for result in results if result.passed)
