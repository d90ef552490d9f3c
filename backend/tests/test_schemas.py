"""
Tests for Pydantic schemas validation.
"""
import pytest
from pydantic import ValidationError

from imghost.schemas.upload import AliOssUploadRequest, R2UploadRequest, UploadResponse


class TestUploadSchemas:
    """Tests for upload request/response schemas."""

    def test_r2_request_from_camel_case(self):
        schema = R2UploadRequest.model_validate({
            "accountId": "acct",
            "accessKeyId": "id",
            "secretAccessKey": "secret",
            "bucket": "b",
            "key": "k",
            "contentType": "image/png",
            "filePath": "/tmp/a.png",
        })

        assert schema.account_id == "acct"
        assert schema.secret_access_key == "secret"
        assert schema.content_type == "image/png"
        assert schema.file_path == "/tmp/a.png"
        assert schema.body_base64 is None
        assert schema.body is None

    def test_oss_request_by_field_name(self):
        schema = AliOssUploadRequest(
            region="oss-cn-beijing",
            access_key_id="id",
            access_key_secret="secret",
            bucket="b",
            key="k",
            body=[0, 255],
        )

        assert schema.body_bytes() == b"\x00\xff"

    def test_body_bytes_absent(self):
        schema = AliOssUploadRequest(
            region="r", access_key_id="i", access_key_secret="s", bucket="b", key="k"
        )
        assert schema.body_bytes() is None

    def test_body_out_of_range(self):
        with pytest.raises(ValidationError):
            AliOssUploadRequest(
                region="r", access_key_id="i", access_key_secret="s", bucket="b", key="k", body=[-1]
            )

    def test_missing_credentials(self):
        with pytest.raises(ValidationError):
            R2UploadRequest(bucket="b", key="k")

    def test_r2_has_no_region(self):
        schema = R2UploadRequest.model_validate({
            "accountId": "a", "accessKeyId": "i", "secretAccessKey": "s",
            "bucket": "b", "key": "k", "region": "us-east-1",
        })
        assert not hasattr(schema, "region")

    def test_upload_response(self):
        assert UploadResponse(key="/a.png").model_dump() == {"key": "/a.png"}
