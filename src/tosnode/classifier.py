# src/tosnode/classifier.py
"""
Error classification for storage operations.

Failures from handlers are normalized into a closed taxonomy:

- ``classify``: ordered rule match (first match wins) producing a
  ``ClassifiedError`` with a fixed-template friendly message, operation
  details and the original low-level message.
- ``to_continue_on_fail_record``: abbreviated record for continue-on-fail
  batches, keyed on error code and HTTP status only.
- ``escalate``: raise a host-level ``NodeOperationError`` carrying the failing
  item's index.

Example:
    ```python
    classifier = ErrorClassifier()
    try:
        result = await handler.execute(host, client, index, credentials)
    except ClientError as exc:
        classified = classifier.classify(exc, "deleteFile", context, credentials)
        match classified.category:
            case ErrorCategory.ACCESS_DENIED:
                ...
        classifier.escalate(classified, index)
    ```
"""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Literal, NoReturn

from botocore.exceptions import (
    ClientError,
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)

from .config import Credentials
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
    StorageNodeError,
    UnsupportedOperationError,
)
from .types import ContinueOnFailRecord


_logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"


class ErrorCategory(str, Enum):
    """Closed error taxonomy. Extend by adding a rule, never by repurposing one."""

    MISSING_PARAMETER = "MissingParameter"
    INVALID_PARAMETER = "InvalidParameter"
    UNSUPPORTED_OPERATION = "UnsupportedOperation"
    NO_CREDENTIALS = "NoCredentials"
    MISSING_BINARY_DATA = "MissingBinaryData"
    NOT_FOUND = "NotFound"
    ACCESS_DENIED = "AccessDenied"
    INVALID_CREDENTIAL = "InvalidCredential"
    SIGNATURE_MISMATCH = "SignatureMismatch"
    BUCKET_NOT_EMPTY = "BucketNotEmpty"
    ENTITY_TOO_LARGE = "EntityTooLarge"
    INVALID_OBJECT_NAME = "InvalidObjectName"
    ARCHIVED_OBJECT = "ArchivedObject"
    NETWORK_UNREACHABLE = "NetworkUnreachable"
    TIMEOUT = "Timeout"
    REGION_MISCONFIGURED = "RegionMisconfigured"
    GENERIC = "Generic"


@dataclass(frozen=True)
class ErrorContext:
    """Where the failed call was pointed; read from the failing item's parameters."""

    file_path: str = ""
    bucket: str = ""


@dataclass(frozen=True)
class ErrorSignal:
    """Normalized view of a caught failure.

    Attributes:
        error: The caught exception.
        code: Storage error code (e.g. "NoSuchKey"), if any.
        status_code: HTTP status, if any.
        message: Storage-side message, or ``str(error)`` for other failures.
        original_message: Full text of the caught exception.
        free_text: Message used for substring rules; empty for the node's own
            typed errors, which classify on type and code only.
    """

    error: BaseException
    code: str | None
    status_code: int | None
    message: str
    original_message: str
    free_text: str


@dataclass(frozen=True)
class ClassifiedError:
    """Classification outcome for one failed invocation (never persisted)."""

    category: ErrorCategory
    friendly_message: str
    details: str
    original_message: str
    operation: str
    cause: BaseException | None = field(default=None, compare=False, repr=False)
    kind: Literal["ClassifiedError"] = "ClassifiedError"

    def layered_message(self) -> str:
        """friendly message → details → original error."""
        return (
            f"{self.friendly_message}\n\n"
            f"Details: {self.details}\n\n"
            f"Original error: {self.original_message or UNKNOWN_ERROR}"
        )


def _client_error_signal(error: ClientError) -> tuple[str | None, int | None, str]:
    response = error.response
    err = response.get("Error", {})
    code = err.get("Code")
    message = err.get("Message") or str(error)
    status = response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    if status is None and isinstance(code, str) and code.isdigit():
        status = int(code)
    return code, status, message


def extract_signal(error: BaseException) -> ErrorSignal:
    """Extract code, status and message from any caught failure."""
    original = str(error) or type(error).__name__

    if isinstance(error, ClientError):
        code, status, message = _client_error_signal(error)
        return ErrorSignal(error, code, status, message, original, message)

    if isinstance(error, StorageNodeError):
        code, status = error.error_code, error.status_code
        cause = error.__cause__
        if isinstance(cause, ClientError):
            cause_code, cause_status, _ = _client_error_signal(cause)
            code = code or cause_code
            status = status if status is not None else cause_status
        return ErrorSignal(error, code, status, str(error), original, "")

    raw_code = getattr(error, "code", None)
    code = raw_code if isinstance(raw_code, str) else None
    return ErrorSignal(error, code, None, str(error), original, str(error))


# ---------------------------------------------------------------------------
# Classification rules
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _RuleInput:
    signal: ErrorSignal
    operation: str
    context: ErrorContext
    credentials: Credentials | None

    @property
    def bucket(self) -> str:
        if self.context.bucket:
            return self.context.bucket
        return self.credentials.bucket if self.credentials else ""

    @property
    def region(self) -> str:
        return self.credentials.region if self.credentials else ""

    @property
    def endpoint(self) -> str:
        if self.credentials and self.credentials.endpoint:
            return self.credentials.endpoint
        return "default"


@dataclass(frozen=True)
class _Rule:
    category: ErrorCategory
    matches: Callable[[ErrorSignal], bool]
    message: Callable[[_RuleInput], str]


_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NotFound", "404"})
_ACCESS_DENIED_CODES = frozenset({"AccessDenied", "Forbidden", "403"})
_ARCHIVED_CODES = frozenset({"ObjectNotInActiveTierError", "InvalidObjectState"})
_INVALID_NAME_CODES = frozenset({"InvalidObjectName", "KeyTooLongError"})
_REGION_CODES = frozenset(
    {
        "AuthorizationHeaderMalformed",
        "IllegalLocationConstraintException",
        "InvalidLocationConstraint",
        "PermanentRedirect",
    }
)
_NETWORK_MARKERS = ("ENOTFOUND", "ECONNREFUSED", "Could not connect")


def _is_timeout(signal: ErrorSignal) -> bool:
    if isinstance(signal.error, (ConnectTimeoutError, ReadTimeoutError, TimeoutError)):
        return True
    return signal.code == "RequestTimeout" or "timeout" in signal.free_text.lower()


def _is_network(signal: ErrorSignal) -> bool:
    error = signal.error
    if isinstance(error, (EndpointConnectionError, ConnectionClosedError)):
        return not isinstance(error, ConnectTimeoutError)
    return any(marker in signal.free_text for marker in _NETWORK_MARKERS)


_RULES: tuple[_Rule, ...] = (
    _Rule(
        ErrorCategory.MISSING_PARAMETER,
        lambda s: isinstance(s.error, MissingParameterError),
        lambda r: (
            f"Missing required parameter: {getattr(r.signal.error, 'parameter', '')}. "
            f"Provide a value before running the {r.operation} operation."
        ),
    ),
    _Rule(
        ErrorCategory.INVALID_PARAMETER,
        lambda s: isinstance(s.error, InvalidParameterError),
        lambda r: f"{r.signal.message}. Correct the parameter and try again.",
    ),
    _Rule(
        ErrorCategory.UNSUPPORTED_OPERATION,
        lambda s: isinstance(s.error, UnsupportedOperationError),
        lambda r: (
            f'Unsupported operation: "{r.operation}" is not an operation this node provides. '
            "Choose one of the listed operations."
        ),
    ),
    _Rule(
        ErrorCategory.NO_CREDENTIALS,
        lambda s: isinstance(s.error, (NoCredentialsError, InvalidCredentialsConfigError)),
        lambda r: (
            "Credentials error: no usable storage credentials were supplied. "
            "Configure the access key, secret key, bucket and region."
        ),
    ),
    _Rule(
        ErrorCategory.MISSING_BINARY_DATA,
        lambda s: isinstance(s.error, MissingBinaryDataError) or "No binary data found" in s.free_text,
        lambda r: (
            "Binary data not found: make sure the upstream node provides file data "
            "and that the binary property name is correct."
        ),
    ),
    _Rule(
        ErrorCategory.BUCKET_NOT_EMPTY,
        lambda s: s.code == "BucketNotEmpty",
        lambda r: (
            f'Bucket not empty: bucket "{r.bucket}" still contains objects and cannot be deleted. '
            "Delete every object in the bucket first."
        ),
    ),
    _Rule(
        ErrorCategory.NOT_FOUND,
        lambda s: (
            isinstance(s.error, BucketNotFoundError) or s.code == "NoSuchBucket" or "bucket" in s.free_text
        ),
        lambda r: (
            f'Bucket error: bucket "{r.bucket}" does not exist or is not accessible. '
            "Check the bucket name and access permissions."
        ),
    ),
    _Rule(
        ErrorCategory.INVALID_CREDENTIAL,
        lambda s: s.code == "InvalidAccessKeyId" or "AccessKey" in s.free_text,
        lambda r: (
            "Access key error: the AccessKey is invalid or has expired. "
            "Check the AccessKey in the credential configuration."
        ),
    ),
    _Rule(
        ErrorCategory.SIGNATURE_MISMATCH,
        lambda s: s.code == "SignatureDoesNotMatch" or "SecretKey" in s.free_text,
        lambda r: (
            "Signature error: the SecretKey is incorrect. "
            "Check the SecretKey in the credential configuration."
        ),
    ),
    _Rule(
        ErrorCategory.NOT_FOUND,
        lambda s: isinstance(s.error, ObjectNotFoundError) or s.code in _NOT_FOUND_CODES or "key" in s.free_text,
        lambda r: (
            f'File not found: the path "{r.context.file_path}" does not exist in bucket "{r.bucket}". '
            "Check that the file path is correct."
        ),
    ),
    _Rule(
        ErrorCategory.ACCESS_DENIED,
        lambda s: isinstance(s.error, ObjectAccessDeniedError) or s.code in _ACCESS_DENIED_CODES,
        lambda r: (
            "Access denied: the current credentials are not allowed to perform this operation. "
            "Check the IAM permission configuration."
        ),
    ),
    _Rule(
        ErrorCategory.ENTITY_TOO_LARGE,
        lambda s: s.code == "EntityTooLarge",
        lambda r: (
            "File too large: the upload exceeds the maximum allowed object size. "
            "Reduce the file size or use multipart upload."
        ),
    ),
    _Rule(
        ErrorCategory.INVALID_OBJECT_NAME,
        lambda s: s.code in _INVALID_NAME_CODES,
        lambda r: (
            f'Invalid object name: the file path "{r.context.file_path}" contains invalid characters. '
            "Check the file path format."
        ),
    ),
    _Rule(
        ErrorCategory.ARCHIVED_OBJECT,
        lambda s: s.code in _ARCHIVED_CODES,
        lambda r: "Object not active: archived or cold-archived objects must be restored before they can be accessed.",
    ),
    _Rule(
        ErrorCategory.NETWORK_UNREACHABLE,
        _is_network,
        lambda r: (
            "Network error: unable to connect to the storage service. "
            f"Check the network connection and endpoint configuration. Current endpoint: {r.endpoint}"
        ),
    ),
    _Rule(
        ErrorCategory.TIMEOUT,
        _is_timeout,
        lambda r: "Request timed out: the storage service did not respond in time. Retry later or check the network.",
    ),
    _Rule(
        ErrorCategory.REGION_MISCONFIGURED,
        lambda s: s.code in _REGION_CODES or "region" in s.free_text,
        lambda r: f'Region configuration error: region "{r.region}" may be incorrect. Check the region setting.',
    ),
)


def _generic_message(rule_input: _RuleInput) -> str:
    return (
        f"Storage operation failed: {rule_input.signal.message or UNKNOWN_ERROR}. "
        "Check the configuration parameters and network connection."
    )


# Abbreviated continue-on-fail messages keyed on storage error code.
_RECORD_MESSAGES: dict[str, str] = {
    "NoSuchBucket": "Bucket does not exist or is not accessible",
    "AccessDenied": "Access denied, check the permission configuration",
    "InvalidAccessKeyId": "AccessKey is invalid or has expired",
    "SignatureDoesNotMatch": "SecretKey is incorrect",
}


class ErrorClassifier:
    """Stateless classifier; one instance is shared by the whole batch."""

    def classify(
        self,
        error: BaseException,
        operation: str,
        context: ErrorContext,
        credentials: Credentials | None,
    ) -> ClassifiedError:
        signal = extract_signal(error)
        rule_input = _RuleInput(signal, operation, context, credentials)

        category = ErrorCategory.GENERIC
        friendly = _generic_message(rule_input)
        for rule in _RULES:
            if rule.matches(signal):
                category = rule.category
                friendly = rule.message(rule_input)
                break

        details = (
            f"Operation: {operation}, "
            f"file path: {context.file_path or 'not specified'}, "
            f"bucket: {rule_input.bucket or 'not specified'}"
        )
        _logger.debug(f"Classified {type(error).__name__} from {operation} as {category.value}")
        return ClassifiedError(
            category=category,
            friendly_message=friendly,
            details=details,
            original_message=signal.original_message,
            operation=operation,
            cause=error,
        )

    def to_continue_on_fail_record(
        self, error: BaseException, operation: str, item_index: int
    ) -> ContinueOnFailRecord:
        signal = extract_signal(error)
        if signal.code in _RECORD_MESSAGES:
            message = _RECORD_MESSAGES[signal.code]
        elif signal.status_code == 404:
            message = "The specified file or bucket was not found"
        else:
            message = signal.message or UNKNOWN_ERROR
        return ContinueOnFailRecord(
            error=message,
            operation=operation,
            item_index=item_index,
            original_error=signal.original_message,
            error_code=signal.code,
            status_code=signal.status_code,
        )

    def escalate(self, error: BaseException | ClassifiedError, item_index: int) -> NoReturn:
        """Raise a host-level error for ``item_index``; never returns."""
        match error:
            case NodeOperationError():
                error.context["itemIndex"] = item_index
                raise error
            case ClassifiedError():
                raise NodeOperationError(
                    error.layered_message(),
                    item_index=item_index,
                    category=error.category.value,
                    context={"operation": error.operation},
                ) from error.cause
            case _:
                raise NodeOperationError(_best_text(error), item_index=item_index) from error


def _best_text(error: BaseException) -> str:
    friendly = getattr(error, "friendly_message", None)
    if isinstance(friendly, str) and friendly:
        return friendly
    if str(error):
        return str(error)
    if error.__traceback__ is not None:
        return "".join(traceback.format_exception(error))
    return UNKNOWN_ERROR


__all__ = [
    "UNKNOWN_ERROR",
    "ErrorCategory",
    "ErrorContext",
    "ErrorSignal",
    "ClassifiedError",
    "ErrorClassifier",
    "extract_signal",
]
