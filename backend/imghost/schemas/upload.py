"""
Pydantic schemas for upload endpoints.

Field names on the wire are camelCase (what the desktop front end sends);
attributes are snake_case.
"""
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Byte = Annotated[int, Field(ge=0, le=255)]


class UploadPayloadFields(BaseModel):
    """Fields shared by both providers: destination and payload sources."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    bucket: str = Field(..., description="Destination bucket")
    key: str = Field(..., description="Object key, returned verbatim on success")
    content_type: Optional[str] = Field(None, description="MIME type of the object")
    file_path: Optional[str] = Field(None, description="Local file to upload (highest priority)")
    body_base64: Optional[str] = Field(None, description="Standard base64 content")
    body: Optional[List[Byte]] = Field(None, description="Raw content as a byte array (lowest priority)")

    def body_bytes(self) -> Optional[bytes]:
        return bytes(self.body) if self.body is not None else None


class R2UploadRequest(UploadPayloadFields):
    """Request schema for a Cloudflare R2 upload."""
    account_id: str = Field(..., description="Cloudflare account id")
    access_key_id: str
    secret_access_key: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "accountId": "0123456789abcdef0123456789abcdef",
                "accessKeyId": "AKIA...",
                "secretAccessKey": "...",
                "bucket": "images",
                "key": "2024/05/cat.webp",
                "contentType": "image/webp",
                "filePath": "/home/me/Pictures/cat.webp"
            }
        }
    )


class AliOssUploadRequest(UploadPayloadFields):
    """Request schema for an Aliyun OSS upload."""
    region: str = Field(..., description="OSS region, e.g. oss-cn-hangzhou")
    access_key_id: str
    access_key_secret: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "region": "oss-cn-hangzhou",
                "accessKeyId": "LTAI...",
                "accessKeySecret": "...",
                "bucket": "my-images",
                "key": "cat.png",
                "contentType": "image/png",
                "bodyBase64": "iVBORw0KGgo="
            }
        }
    )


class UploadResponse(BaseModel):
    """Response schema for a successful upload."""
    key: str = Field(..., description="Object key exactly as sent")
