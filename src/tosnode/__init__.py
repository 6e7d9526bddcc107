# src/tosnode/__init__.py
"""
Object-storage workflow node for TOS-compatible (S3-dialect) services.

A host workflow engine hands the node a batch of items; each item names one
operation (existence check, upload, download, delete, list, copy, bucket
create/delete/list, presigned URL). The node runs them in order against one
async storage client and returns one output item per input item, either a
result record or, with continue-on-fail, an abbreviated failure record.
"""

from __future__ import annotations

from .classifier import (
    ClassifiedError,
    ErrorCategory,
    ErrorClassifier,
    ErrorContext,
)
from .client import AioBotoStorageClient, StorageSession
from .config import (
    Credentials,
    NodeSettings,
    credentials_from_env,
    load_settings,
    parse_credentials,
)
from .dispatcher import Dispatcher
from .errors import (
    BucketNotFoundError,
    InvalidCredentialsConfigError,
    InvalidParameterError,
    MissingBinaryDataError,
    MissingParameterError,
    NoCredentialsError,
    NodeOperationError,
    ObjectAccessDeniedError,
    ObjectNotFoundError,
    PublicAccessError,
    StorageNodeError,
    UnsupportedOperationError,
)
from .host import BatchContext
from .node import ObjectStorageNode
from .protocols import ExecutionContext, StorageClient
from .registry import OperationRegistry, build_default_registry
from .result import Failure, Result, Success
from .types import (
    BinaryPayload,
    ContinueOnFailRecord,
    InputItem,
    OperationCode,
    OperationResult,
    OutputItem,
)


__all__ = [
    # Entry point
    "ObjectStorageNode",
    "Dispatcher",
    "BatchContext",
    # Registry
    "OperationRegistry",
    "build_default_registry",
    # Classification
    "ErrorClassifier",
    "ErrorCategory",
    "ErrorContext",
    "ClassifiedError",
    # Storage client
    "StorageClient",
    "ExecutionContext",
    "AioBotoStorageClient",
    "StorageSession",
    # Configuration
    "Credentials",
    "NodeSettings",
    "parse_credentials",
    "credentials_from_env",
    "load_settings",
    # Data model
    "OperationCode",
    "OperationResult",
    "InputItem",
    "OutputItem",
    "BinaryPayload",
    "ContinueOnFailRecord",
    # Result
    "Result",
    "Success",
    "Failure",
    # Errors
    "StorageNodeError",
    "MissingParameterError",
    "InvalidParameterError",
    "UnsupportedOperationError",
    "NoCredentialsError",
    "InvalidCredentialsConfigError",
    "MissingBinaryDataError",
    "ObjectNotFoundError",
    "ObjectAccessDeniedError",
    "BucketNotFoundError",
    "PublicAccessError",
    "NodeOperationError",
]
