"""
Upload service: one call, one upload.

Flow per call:
1. Check the required credential/addressing fields
2. Pick and resolve the payload source (file path > base64 > raw body)
3. Hand the bytes to the provider client (R2 or OSS)
4. Return {key} or raise an UploadError carrying the caller-facing message

Calls share no state; every upload builds its own clients and signing
material from the request it receives.
"""
import logging
import time
from typing import Dict, Optional

import httpx

from imghost.errors import InvalidInputError, UploadError
from imghost.schemas.upload import AliOssUploadRequest, R2UploadRequest, UploadPayloadFields
from imghost.services.response_mapper import UploadResult, to_result
from imghost.storage.oss_client import Clock, OssCredentials, OssUploader, utc_now
from imghost.storage.payload import FileReader, read_file_bytes, resolve_payload, select_source
from imghost.storage.r2_client import ClientFactory, R2Credentials, R2Uploader, build_r2_client
from imghost.utils.logging import log_upload_completed, log_upload_failed, log_upload_started
from imghost.utils.metrics import upload_bytes, upload_duration_seconds, uploads_total

logger = logging.getLogger(__name__)

PROVIDER_R2 = "r2"
PROVIDER_ALIOSS = "alioss"


def require_fields(fields: Dict[str, Optional[str]]) -> None:
    """
    Raise InvalidInputError naming every blank field.

    Args:
        fields: Wire name -> value
    """
    missing = [name for name, value in fields.items() if not value or not value.strip()]
    if missing:
        raise InvalidInputError(f"missing required fields: {', '.join(missing)}")


class UploadService:
    """
    Runs uploads against R2 and OSS.

    Collaborators are injectable so signing and payload handling can be
    tested without disk, clock or network.

    Args:
        read_file: Blocking file reader, run in a worker thread
        clock: Source of "now" for the OSS Date header
        oss_transport: httpx transport for OSS requests (None = network)
        r2_client_factory: Builds an S3 client from R2 credentials
    """

    def __init__(
        self,
        read_file: FileReader = read_file_bytes,
        clock: Clock = utc_now,
        oss_transport: Optional[httpx.AsyncBaseTransport] = None,
        r2_client_factory: ClientFactory = build_r2_client,
    ):
        self._read_file = read_file
        self._r2 = R2Uploader(client_factory=r2_client_factory)
        self._oss = OssUploader(transport=oss_transport, clock=clock)

    async def _resolve_body(self, provider: str, request: UploadPayloadFields) -> bytes:
        log_upload_started(
            logger,
            provider=provider,
            key=request.key,
            has_file_path=bool(request.file_path and request.file_path.strip()),
            body_base64_len=len(request.body_base64) if request.body_base64 is not None else 0,
            body_len=len(request.body) if request.body is not None else 0,
        )
        source = select_source(request.file_path, request.body_base64, request.body_bytes())
        return await resolve_payload(source, read_file=self._read_file)

    async def r2_upload(self, request: R2UploadRequest) -> UploadResult:
        """
        Upload to Cloudflare R2.

        Region is always "auto" and addressing always path-style; the request
        has no way to change either.

        Raises:
            UploadError: Any failure, with the message for the caller
        """
        start_time = time.time()
        try:
            require_fields({
                "accountId": request.account_id,
                "accessKeyId": request.access_key_id,
                "secretAccessKey": request.secret_access_key,
                "bucket": request.bucket,
                "key": request.key,
            })
            body = await self._resolve_body(PROVIDER_R2, request)
            credentials = R2Credentials(
                account_id=request.account_id,
                access_key_id=request.access_key_id,
                secret_access_key=request.secret_access_key,
            )
            key = await self._r2.put_object(
                credentials,
                bucket=request.bucket,
                key=request.key,
                body=body,
                content_type=request.content_type,
            )
        except UploadError as e:
            self._record_failure(PROVIDER_R2, request.key, e, start_time)
            raise

        self._record_success(PROVIDER_R2, key, len(body), start_time)
        return to_result(key)

    async def alioss_upload(self, request: AliOssUploadRequest) -> UploadResult:
        """
        Upload to Aliyun OSS.

        A missing or empty content type is sent as application/octet-stream.
        The returned key is the request's key, even when a leading slash was
        dropped to build the URL.

        Raises:
            UploadError: Any failure, with the message for the caller
        """
        start_time = time.time()
        try:
            require_fields({
                "region": request.region,
                "accessKeyId": request.access_key_id,
                "accessKeySecret": request.access_key_secret,
                "bucket": request.bucket,
                "key": request.key,
            })
            body = await self._resolve_body(PROVIDER_ALIOSS, request)
            credentials = OssCredentials(
                region=request.region,
                access_key_id=request.access_key_id,
                access_key_secret=request.access_key_secret,
            )
            key = await self._oss.put_object(
                credentials,
                bucket=request.bucket,
                key=request.key,
                body=body,
                content_type=request.content_type,
            )
        except UploadError as e:
            self._record_failure(PROVIDER_ALIOSS, request.key, e, start_time)
            raise

        self._record_success(PROVIDER_ALIOSS, key, len(body), start_time)
        return to_result(key)

    @staticmethod
    def _record_success(provider: str, key: str, size: int, start_time: float) -> None:
        duration = time.time() - start_time
        uploads_total.labels(provider=provider, status="success").inc()
        upload_duration_seconds.labels(provider=provider).observe(duration)
        upload_bytes.labels(provider=provider).observe(size)
        log_upload_completed(logger, provider=provider, key=key, size_bytes=size, duration_ms=duration * 1000)

    @staticmethod
    def _record_failure(provider: str, key: str, error: UploadError, start_time: float) -> None:
        duration = time.time() - start_time
        uploads_total.labels(provider=provider, status="failed").inc()
        upload_duration_seconds.labels(provider=provider).observe(duration)
        log_upload_failed(
            logger,
            provider=provider,
            key=key,
            error=error.message,
            error_type=type(error).__name__,
            duration_ms=duration * 1000,
        )


# Default instance used by the API
_upload_service: Optional[UploadService] = None


def get_upload_service() -> UploadService:
    """
    Get the shared UploadService.

    It holds collaborators only, never per-call data.
    """
    global _upload_service
    if _upload_service is None:
        _upload_service = UploadService()
    return _upload_service


async def r2_upload(request: R2UploadRequest) -> UploadResult:
    """Upload to R2 with the default service."""
    return await get_upload_service().r2_upload(request)


async def alioss_upload(request: AliOssUploadRequest) -> UploadResult:
    """Upload to Aliyun OSS with the default service."""
    return await get_upload_service().alioss_upload(request)
