"""
Pydantic schemas for request/response validation.
"""
from imghost.schemas.upload import (
    AliOssUploadRequest,
    R2UploadRequest,
    UploadResponse,
)

__all__ = [
    "AliOssUploadRequest",
    "R2UploadRequest",
    "UploadResponse",
]
