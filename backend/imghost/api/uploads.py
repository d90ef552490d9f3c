"""
Upload endpoints called by the desktop front end.

1. POST /uploads/r2     - Put an object into Cloudflare R2
2. POST /uploads/alioss - Put an object into Aliyun OSS

Both answer {"key": ...} on success. On failure the single error message
is returned as the HTTPException detail; the front end decides what to do
with it (no retries happen here).
"""
from fastapi import APIRouter, Depends, HTTPException

from imghost.errors import UploadError
from imghost.schemas.upload import AliOssUploadRequest, R2UploadRequest, UploadResponse
from imghost.services.response_mapper import error_message, http_status_for
from imghost.services.upload_service import UploadService, get_upload_service

router = APIRouter()


def _to_http_exception(exc: UploadError) -> HTTPException:
    return HTTPException(status_code=http_status_for(exc), detail=error_message(exc))


@router.post("/r2", response_model=UploadResponse)
async def r2_upload(
    request: R2UploadRequest,
    service: UploadService = Depends(get_upload_service)
):
    """
    Upload an object to Cloudflare R2.

    Content comes from filePath, bodyBase64 or body, in that priority order.
    contentType is only sent when non-empty.
    """
    try:
        result = await service.r2_upload(request)
    except UploadError as e:
        raise _to_http_exception(e)

    return UploadResponse(key=result.key)


@router.post("/alioss", response_model=UploadResponse)
async def alioss_upload(
    request: AliOssUploadRequest,
    service: UploadService = Depends(get_upload_service)
):
    """
    Upload an object to Aliyun OSS.

    Content comes from filePath, bodyBase64 or body, in that priority order.
    contentType defaults to application/octet-stream.
    """
    try:
        result = await service.alioss_upload(request)
    except UploadError as e:
        raise _to_http_exception(e)

    return UploadResponse(key=result.key)
