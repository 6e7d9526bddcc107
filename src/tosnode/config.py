"""
Credentials and settings for the object-storage node.

Credentials are resolved once per batch and shared read-only by every handler
invocation. Settings carry the ambient knobs (URL templates, transport timeouts
and retry policy) that the storage client and handlers read.

Environment fallbacks follow the usual TOS/AWS variable names:

    TOS_ACCESS_KEY / AWS_ACCESS_KEY_ID
    TOS_SECRET_KEY / AWS_SECRET_ACCESS_KEY
    TOS_BUCKET
    TOS_REGION / AWS_REGION
    TOS_ENDPOINT / AWS_ENDPOINT_URL

``credentials_from_env`` is a host-side helper: the node itself only reads the
mapping the host returns from ``get_credentials()``, so a host without its own
credential store passes this mapping through. ``load_settings`` supplies the
settings of an ``ObjectStorageNode`` built without explicit settings.
"""

from __future__ import annotations

import os
from typing import Literal, Mapping

from botocore.config import Config
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .result import Failure, Result, Success


DEFAULT_REGION = "cn-north-1"

_CAMEL_KEYS = {
    "accessKey": "access_key",
    "secretKey": "secret_key",
}


class Credentials(BaseModel):
    """Immutable storage credentials for one batch."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    access_key: str = Field(..., min_length=1)
    secret_key: str = Field(..., min_length=1, repr=False)
    bucket: str = ""
    region: str = Field(DEFAULT_REGION, min_length=1)
    endpoint: str | None = None


class NodeSettings(BaseModel):
    """Ambient configuration shared by the storage client and the handlers."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    url_template: str = "https://{bucket}.tos-{region}.volces.com"
    endpoint_template: str = "https://tos-s3-{region}.volces.com"
    result_url_expires: int = Field(3600, ge=1, le=604800)
    connect_timeout: float = Field(5.0, gt=0)
    read_timeout: float = Field(60.0, gt=0)
    max_attempts: int = Field(3, ge=1)
    retry_mode: Literal["legacy", "standard", "adaptive"] = "adaptive"
    max_pool_connections: int = Field(10, ge=1)

    def boto_config(self) -> Config:
        """botocore client configuration; transport retries stay inside botocore."""
        return Config(
            max_pool_connections=self.max_pool_connections,
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
            retries={"max_attempts": self.max_attempts, "mode": self.retry_mode},
            s3={"addressing_style": "virtual"},
        )

    def endpoint_for(self, credentials: Credentials) -> str:
        if credentials.endpoint:
            return credentials.endpoint
        return self.endpoint_template.format(region=credentials.region)


def parse_credentials(raw: Mapping[str, object]) -> Result[Credentials, ValidationError]:
    """
    Validate a host credential mapping into ``Credentials``.

    Accepts both snake_case and the host's camelCase keys. Empty endpoint
    strings are treated as "no custom endpoint".
    """
    data: dict[str, object] = {_CAMEL_KEYS.get(key, key): value for key, value in raw.items()}
    if data.get("endpoint") in ("", None):
        data.pop("endpoint", None)
    if data.get("region") in ("", None):
        data.pop("region", None)
    try:
        return Success(Credentials(**data))
    except ValidationError as exc:
        return Failure(exc)


def _env(*names: str) -> str | None:
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


def credentials_from_env() -> dict[str, object] | None:
    """
    Build a raw credential mapping from the environment.

    Returns None when no access key is configured so the caller can fail with
    the dedicated no-credentials error.
    """
    access_key = _env("TOS_ACCESS_KEY", "AWS_ACCESS_KEY_ID")
    if access_key is None:
        return None
    return {
        "access_key": access_key,
        "secret_key": _env("TOS_SECRET_KEY", "AWS_SECRET_ACCESS_KEY") or "",
        "bucket": _env("TOS_BUCKET") or "",
        "region": _env("TOS_REGION", "AWS_REGION") or DEFAULT_REGION,
        "endpoint": _env("TOS_ENDPOINT", "AWS_ENDPOINT_URL"),
    }


def load_settings() -> NodeSettings:
    """Settings with ``TOSNODE_*`` environment overrides applied."""
    overrides: dict[str, object] = {}
    for name in NodeSettings.model_fields:
        value = os.environ.get(f"TOSNODE_{name.upper()}")
        if value is not None:
            overrides[name] = value
    return NodeSettings(**overrides)


__all__ = [
    "DEFAULT_REGION",
    "Credentials",
    "NodeSettings",
    "parse_credentials",
    "credentials_from_env",
    "load_settings",
]
