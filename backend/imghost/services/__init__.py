"""
Business logic services.
"""
from imghost.services.response_mapper import UploadResult
from imghost.services.upload_service import UploadService, alioss_upload, r2_upload

__all__ = [
    "UploadResult",
    "UploadService",
    "alioss_upload",
    "r2_upload",
]
