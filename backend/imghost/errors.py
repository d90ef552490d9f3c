"""
Upload error taxonomy.

Every failure is converted into one of these at the point where it happens.
The message is what the caller sees; the subclass keeps the granularity.
"""
from typing import Optional


class UploadError(Exception):
    """Base class for all upload failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidInputError(UploadError):
    """No payload source given, malformed base64, or missing fields."""


class PayloadIOError(UploadError):
    """Reading the caller-specified source file failed."""


class CredentialError(UploadError):
    """Signing material could not be built from the supplied credentials."""


class TransportError(UploadError):
    """The provider could not be reached (DNS, TLS, connection)."""


class ProviderError(UploadError):
    """The provider answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
