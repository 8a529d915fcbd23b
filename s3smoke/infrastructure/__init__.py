"""Infrastructure layer for the smoke test.

This package wraps the external object storage client:
- Client construction for S3-compatible endpoints (MinIO)
- Inspection of errors raised by the client

Keep client-specific concerns out of the step logic.
"""
