"""
Cloudflare R2 / S3-compatible upload client.

Uses boto3 with the S3-compatible API. Unlike a long-lived service client,
everything here is built per call from the credentials the caller sends:
no environment, no profile, no credential file.

Signing (SigV4) and transport retries are left to botocore.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    NoCredentialsError,
    PartialCredentialsError,
)

from imghost.config import settings
from imghost.errors import CredentialError, InvalidInputError, ProviderError, TransportError

logger = logging.getLogger(__name__)

# R2 has no regions; S3 clients must still be given one
R2_REGION = "auto"

# Tag attached to every request made with caller-supplied credentials
R2_CREDENTIAL_SOURCE = "r2-upload"


@dataclass(frozen=True)
class R2Credentials:
    """Per-call R2 credentials. Never logged, never cached."""
    account_id: str
    access_key_id: str
    secret_access_key: str


ClientFactory = Callable[[R2Credentials], Any]


def r2_endpoint(account_id: str) -> str:
    """Endpoint URL for an R2 account, e.g. https://<account_id>.r2.cloudflarestorage.com"""
    return settings.r2_endpoint_template.format(account_id=account_id)


def build_r2_client(credentials: R2Credentials):
    """
    Create an S3 client pointed at the account's R2 endpoint.

    A fresh boto3 Session is used on every call; boto3's default session is
    not safe to share between threads.
    """
    session = boto3.session.Session()
    return session.client(
        's3',
        endpoint_url=r2_endpoint(credentials.account_id),
        aws_access_key_id=credentials.access_key_id,
        aws_secret_access_key=credentials.secret_access_key,
        aws_session_token=None,
        region_name=R2_REGION,
        config=Config(
            signature_version='s3v4',
            s3={'addressing_style': 'path'},  # R2 uses path-style
            # R2 does not accept the default trailing checksums
            request_checksum_calculation='when_required',
            response_checksum_validation='when_required',
            user_agent_extra=R2_CREDENTIAL_SOURCE,
        )
    )


def build_put_params(bucket: str, key: str, body: bytes, content_type: Optional[str] = None) -> dict:
    """put_object parameters; ContentType is only sent when non-empty."""
    params = {
        'Bucket': bucket,
        'Key': key,
        'Body': body,
    }
    if content_type:
        params['ContentType'] = content_type
    return params


class R2Uploader:
    """
    Uploads objects to R2.

    Args:
        client_factory: Builds an S3 client from credentials (tests swap it)
    """

    def __init__(self, client_factory: ClientFactory = build_r2_client):
        self._client_factory = client_factory

    def _put(self, credentials: R2Credentials, params: dict) -> None:
        client = self._client_factory(credentials)
        client.put_object(**params)

    async def put_object(
        self,
        credentials: R2Credentials,
        bucket: str,
        key: str,
        body: bytes,
        content_type: Optional[str] = None,
    ) -> str:
        """
        Upload bytes to R2.

        Every failure is reported as "R2 upload failed: ..." whatever its cause;
        the exception type keeps the cause.

        Returns:
            The key as given

        Raises:
            ProviderError: R2 rejected the request
            InvalidInputError: The account id does not make a valid endpoint
            CredentialError: botocore could not use the credentials
            TransportError: Anything else botocore raised (network, TLS, ...)
        """
        params = build_put_params(bucket, key, body, content_type)

        try:
            # boto3 is synchronous, run in thread pool to avoid blocking
            await asyncio.to_thread(self._put, credentials, params)
        except ClientError as e:
            status_code = e.response.get('ResponseMetadata', {}).get('HTTPStatusCode')
            error = e.response.get('Error', {})
            raise ProviderError(
                f"R2 upload failed: {e}",
                status_code=status_code,
                body=error.get('Message') or error.get('Code') or "",
            )
        except (NoCredentialsError, PartialCredentialsError) as e:
            raise CredentialError(f"R2 upload failed: {e}")
        except BotoCoreError as e:
            raise TransportError(f"R2 upload failed: {e}")
        except ValueError as e:
            # botocore rejects malformed endpoints (bad account id) at client creation
            raise InvalidInputError(f"R2 upload failed: {e}")

        logger.debug(f"R2 accepted {key} ({len(body)} bytes)")
        return key
