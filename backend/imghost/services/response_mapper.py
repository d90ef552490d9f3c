"""
Maps upload outcomes to what callers see.

Success is always {key}; failure is a single human-readable message,
plus an HTTP status for the API layer.
"""
from dataclasses import dataclass

from imghost.errors import (
    CredentialError,
    InvalidInputError,
    PayloadIOError,
    UploadError,
)

# Failures caused by what the caller sent vs. failures talking to the provider
CLIENT_ERROR_STATUS = 400
UPSTREAM_ERROR_STATUS = 502


@dataclass(frozen=True)
class UploadResult:
    """Result of a successful upload: the caller's key, verbatim."""
    key: str


def to_result(key: str) -> UploadResult:
    return UploadResult(key=key)


def error_message(exc: UploadError) -> str:
    return exc.message


def http_status_for(exc: UploadError) -> int:
    """HTTP status the API answers with for a given failure."""
    if isinstance(exc, (InvalidInputError, PayloadIOError, CredentialError)):
        return CLIENT_ERROR_STATUS
    return UPSTREAM_ERROR_STATUS
