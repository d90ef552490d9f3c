"""
Storage module for the two supported object stores.

Both clients are built per call from caller-supplied credentials;
nothing is cached between uploads.
"""
from imghost.storage.payload import (
    Base64Body,
    FilePath,
    PayloadSource,
    RawBody,
    resolve_payload,
    select_source,
)
from imghost.storage.r2_client import R2Credentials, R2Uploader
from imghost.storage.oss_client import OssCredentials, OssUploader

__all__ = [
    "Base64Body",
    "FilePath",
    "PayloadSource",
    "RawBody",
    "resolve_payload",
    "select_source",
    "R2Credentials",
    "R2Uploader",
    "OssCredentials",
    "OssUploader",
]
