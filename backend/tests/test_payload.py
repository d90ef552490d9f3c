"""
Tests for payload source selection and resolution.
"""
import base64
import threading

import pytest

from imghost.errors import InvalidInputError, PayloadIOError
from imghost.storage.payload import (
    Base64Body,
    FilePath,
    RawBody,
    decode_base64,
    resolve_payload,
    select_source,
)


class TestSelectSource:
    """Priority: file path, then base64, then raw body."""

    def test_file_path_only(self):
        assert select_source(file_path="/tmp/a.png") == FilePath("/tmp/a.png")

    def test_base64_only(self):
        assert select_source(body_base64="aGk=") == Base64Body("aGk=")

    def test_body_only(self):
        assert select_source(body=[104, 105]) == RawBody(b"hi")

    def test_file_path_wins_over_everything(self):
        source = select_source(file_path="/tmp/a.png", body_base64="aGk=", body=b"raw")
        assert source == FilePath("/tmp/a.png")

    def test_base64_wins_over_body(self):
        assert select_source(body_base64="aGk=", body=b"raw") == Base64Body("aGk=")

    @pytest.mark.parametrize("blank", ["", "   ", "\t\n"])
    def test_blank_file_path_is_absent(self, blank):
        assert select_source(file_path=blank, body=b"raw") == RawBody(b"raw")

    def test_nothing_supplied(self):
        with pytest.raises(InvalidInputError, match="no upload content provided"):
            select_source()

    def test_only_blank_file_path(self):
        with pytest.raises(InvalidInputError, match="no upload content provided"):
            select_source(file_path="  ")

    def test_empty_base64_string_still_counts(self):
        assert select_source(body_base64="", body=b"raw") == Base64Body("")


class TestDecodeBase64:
    """Strict standard base64."""

    def test_valid(self):
        assert decode_base64(base64.b64encode(b"\x89PNG\r\n").decode()) == b"\x89PNG\r\n"

    @pytest.mark.parametrize("bad", ["not base64!", "aGk", "a===", "aG-k", "aGk=\x00"])
    def test_malformed_is_invalid_input(self, bad):
        with pytest.raises(InvalidInputError, match="decode failed"):
            decode_base64(bad)


class TestResolvePayload:
    """Turning a source into bytes."""

    @pytest.mark.asyncio
    async def test_reads_file_from_disk(self, tmp_path):
        path = tmp_path / "cat.png"
        path.write_bytes(b"\x89PNG fake")

        assert await resolve_payload(FilePath(str(path))) == b"\x89PNG fake"

    @pytest.mark.asyncio
    async def test_missing_file_is_io_error(self, tmp_path):
        with pytest.raises(PayloadIOError, match="read failed"):
            await resolve_payload(FilePath(str(tmp_path / "missing.png")))

    @pytest.mark.asyncio
    async def test_directory_is_io_error(self, tmp_path):
        with pytest.raises(PayloadIOError):
            await resolve_payload(FilePath(str(tmp_path)))

    @pytest.mark.asyncio
    async def test_file_read_runs_off_the_event_loop_thread(self):
        seen = {}

        def reader(path):
            seen["thread"] = threading.get_ident()
            seen["path"] = path
            return b"data"

        loop_thread = threading.get_ident()
        assert await resolve_payload(FilePath("/x/y.png"), read_file=reader) == b"data"
        assert seen["path"] == "/x/y.png"
        assert seen["thread"] != loop_thread

    @pytest.mark.asyncio
    async def test_base64_source(self):
        assert await resolve_payload(Base64Body("aGVsbG8=")) == b"hello"

    @pytest.mark.asyncio
    async def test_malformed_base64_source(self):
        with pytest.raises(InvalidInputError):
            await resolve_payload(Base64Body("@@@"))

    @pytest.mark.asyncio
    async def test_raw_source(self):
        assert await resolve_payload(RawBody(b"\x00\x01")) == b"\x00\x01"
