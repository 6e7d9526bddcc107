# tests/helpers/constants.py
"""Shared constants for tosnode tests."""

from __future__ import annotations

TEST_ACCESS_KEY = "AKLTtestaccesskey"
TEST_SECRET_KEY = "dGVzdHNlY3JldGtleQ=="
TEST_BUCKET = "test-bucket"
TEST_REGION = "cn-beijing"
TEST_ENDPOINT = "http://localhost:9000"

ALL_OPERATION_CODES = (
    "checkExistence",
    "uploadFile",
    "downloadFile",
    "deleteFile",
    "listFiles",
    "copyFile",
    "createBucket",
    "deleteBucket",
    "listBuckets",
    "getPreSignedUrl",
)
