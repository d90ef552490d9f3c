"""
Aliyun OSS upload client.

Signs requests by hand with the OSS header signature (HMAC-SHA1) and sends
a single PUT with httpx. No SDK involved.

String to sign for a PUT without Content-MD5 or x-oss-* headers:

    PUT\\n
    \\n                      <- Content-MD5 (omitted)
    {content_type}\\n
    {date}\\n
    /{bucket}/{key}

The byte layout must match exactly or OSS rejects the signature.
"""
import base64
import hashlib
import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Callable, Dict, Optional
from urllib.parse import quote

import httpx

from imghost.config import settings
from imghost.errors import CredentialError, InvalidInputError, ProviderError, TransportError

logger = logging.getLogger(__name__)

# Characters left as-is when the key becomes a URL path
PATH_SAFE_CHARS = "/!$&'()*+,;=:@%"

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class OssCredentials:
    """Per-call OSS credentials. Never logged, never cached."""
    region: str
    access_key_id: str
    access_key_secret: str


@dataclass(frozen=True)
class OssPutRequest:
    """A fully signed PUT, ready to send."""
    url: str
    headers: Dict[str, str]
    string_to_sign: str


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def http_date(moment: datetime) -> str:
    """Format as an RFC 7231 HTTP-date, e.g. 'Thu, 17 Nov 2005 18:49:58 GMT'."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return format_datetime(moment.astimezone(timezone.utc), usegmt=True)


def object_path(key: str) -> str:
    """URL path for an object key: one leading slash dropped, then re-rooted and escaped."""
    stripped = key[1:] if key.startswith("/") else key
    return "/" + quote(stripped, safe=PATH_SAFE_CHARS)


def canonicalized_resource(bucket: str, path: str) -> str:
    return f"/{bucket}{path}"


def build_string_to_sign(method: str, content_type: str, date: str, resource: str) -> str:
    return f"{method}\n\n{content_type}\n{date}\n{resource}"


def sign(secret: str, string_to_sign: str) -> str:
    """
    base64(HMAC-SHA1(secret, string_to_sign)).

    Raises:
        CredentialError: If the secret cannot be used as an HMAC key
    """
    try:
        key = secret.encode("utf-8")
    except UnicodeEncodeError:
        raise CredentialError("AccessKeySecret invalid")
    digest = hmac.new(key, string_to_sign.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


def authorization_header(access_key_id: str, signature: str) -> str:
    return f"OSS {access_key_id}:{signature}"


def build_put_request(
    credentials: OssCredentials,
    bucket: str,
    key: str,
    content_type: Optional[str] = None,
    clock: Clock = utc_now,
) -> OssPutRequest:
    """
    Build the signed PUT for one object.

    The Date header is computed once and used both in the string to sign
    and on the wire.
    """
    content_type = content_type or settings.oss_default_content_type
    host = settings.oss_host_template.format(bucket=bucket, region=credentials.region)
    # httpx drops "." and ".." segments when parsing; sign the path it sends
    try:
        url = httpx.URL(f"https://{host}{object_path(key)}")
    except httpx.InvalidURL as e:
        raise InvalidInputError(f"invalid OSS URL: {e}")
    path = url.raw_path.decode("ascii")
    date = http_date(clock())

    string_to_sign = build_string_to_sign(
        "PUT", content_type, date, canonicalized_resource(bucket, path)
    )
    signature = sign(credentials.access_key_secret, string_to_sign)

    return OssPutRequest(
        url=str(url),
        headers={
            "Date": date,
            "Content-Type": content_type,
            "Authorization": authorization_header(credentials.access_key_id, signature),
        },
        string_to_sign=string_to_sign,
    )


class OssUploader:
    """
    Sends signed PUTs to OSS.

    A new httpx.AsyncClient is opened per upload so concurrent calls share
    nothing. Pass a transport to route requests elsewhere (tests).
    """

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Clock = utc_now,
    ):
        self._transport = transport
        self._clock = clock

    async def put_object(
        self,
        credentials: OssCredentials,
        bucket: str,
        key: str,
        body: bytes,
        content_type: Optional[str] = None,
    ) -> str:
        """
        Upload bytes to OSS.

        Returns:
            The key exactly as given, leading slash included

        Raises:
            CredentialError: If the secret is unusable
            InvalidInputError: If bucket or region do not form a valid host
            TransportError: If the request could not be sent
            ProviderError: If OSS answers with a non-2xx status
        """
        request = build_put_request(credentials, bucket, key, content_type, clock=self._clock)

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.put(request.url, headers=request.headers, content=body)
                if not response.is_success:
                    try:
                        await response.aread()
                        text = response.text
                    except (httpx.HTTPError, UnicodeDecodeError):
                        text = ""
                    raise ProviderError(
                        f"Aliyun upload failed: {response.status_code} {response.reason_phrase} {text}",
                        status_code=response.status_code,
                        body=text,
                    )
        except httpx.HTTPError as e:
            raise TransportError(f"Aliyun upload request failed: {e}")

        logger.debug(f"OSS accepted {key} ({len(body)} bytes)")
        return key
