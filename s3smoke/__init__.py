"""Smoke tests for S3-compatible object storage endpoints."""
