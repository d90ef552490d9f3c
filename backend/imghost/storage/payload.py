"""
Upload payload resolution.

A request can carry its content in one of three ways: a path on the local
disk, a base64 string, or raw bytes. The first usable one wins, in that order:

    FilePath  >  Base64Body  >  RawBody

The others are ignored without a diagnostic.
"""
import asyncio
import base64
import binascii
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from imghost.errors import InvalidInputError, PayloadIOError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilePath:
    """Content lives in a file on disk."""
    path: str


@dataclass(frozen=True)
class Base64Body:
    """Content is a standard (padded) base64 string."""
    data: str


@dataclass(frozen=True)
class RawBody:
    """Content is already bytes."""
    data: bytes


PayloadSource = Union[FilePath, Base64Body, RawBody]

FileReader = Callable[[str], bytes]


def read_file_bytes(path: str) -> bytes:
    """Read a whole file. Blocking; run it off the event loop."""
    return Path(path).read_bytes()


def select_source(
    file_path: Optional[str] = None,
    body_base64: Optional[str] = None,
    body: Optional[Union[bytes, Sequence[int]]] = None,
) -> PayloadSource:
    """
    Pick the payload source for a request.

    Args:
        file_path: Local path; blank or whitespace-only counts as absent
        body_base64: Base64 content; counts when not None
        body: Raw content; counts when not None

    Returns:
        The first matching source

    Raises:
        InvalidInputError: If no source was supplied
    """
    if file_path is not None and file_path.strip():
        return FilePath(file_path)
    if body_base64 is not None:
        return Base64Body(body_base64)
    if body is not None:
        return RawBody(bytes(body))
    raise InvalidInputError("no upload content provided")


def decode_base64(data: str) -> bytes:
    """Strict base64 decode: any character outside the alphabet or bad padding fails."""
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise InvalidInputError("decode failed")


async def resolve_payload(
    source: PayloadSource,
    read_file: FileReader = read_file_bytes,
) -> bytes:
    """
    Turn a payload source into bytes.

    File reads are blocking, so they run in the default thread pool and
    the caller's event loop stays free.

    Raises:
        PayloadIOError: If the file cannot be read
        InvalidInputError: If base64 content is malformed
    """
    if isinstance(source, FilePath):
        try:
            return await asyncio.to_thread(read_file, source.path)
        except (OSError, ValueError) as e:
            # ValueError: paths with embedded NUL bytes
            logger.warning(f"Failed to read upload source file: {e}")
            raise PayloadIOError(f"read failed: {e}")
    if isinstance(source, Base64Body):
        return decode_base64(source.data)
    return source.data
