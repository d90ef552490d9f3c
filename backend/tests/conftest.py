"""
Test configuration and fixtures.
No network and no real credentials: OSS goes through httpx.MockTransport,
R2 through botocore's Stubber or a fake client.
"""
import os

# Set test environment before any imports
os.environ["ENVIRONMENT"] = "test"
os.environ.pop("DEVTOOLS", None)

import pytest
from datetime import datetime, timezone
from typing import AsyncGenerator, Callable, List
from unittest.mock import MagicMock

import httpx
from httpx import AsyncClient, ASGITransport

from imghost.services.upload_service import UploadService


FIXED_NOW = datetime(2005, 11, 17, 18, 49, 58, tzinfo=timezone.utc)
FIXED_HTTP_DATE = "Thu, 17 Nov 2005 18:49:58 GMT"


def fixed_clock() -> datetime:
    return FIXED_NOW


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it was handed."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def oss_ok_transport() -> RecordingTransport:
    """OSS answering 200 to everything."""
    return RecordingTransport(lambda request: httpx.Response(200))


@pytest.fixture
def fake_s3_client() -> MagicMock:
    """Stand-in for a boto3 S3 client; put_object succeeds."""
    client = MagicMock()
    client.put_object.return_value = {"ETag": '"abc"'}
    return client


@pytest.fixture
def upload_service(oss_ok_transport: RecordingTransport, fake_s3_client: MagicMock) -> UploadService:
    """UploadService wired to fakes, with a fixed clock."""
    return UploadService(
        clock=fixed_clock,
        oss_transport=oss_ok_transport,
        r2_client_factory=lambda credentials: fake_s3_client,
    )


@pytest.fixture(scope="function")
async def client(upload_service: UploadService) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    from imghost.main import app
    from imghost.services.upload_service import get_upload_service

    app.dependency_overrides[get_upload_service] = lambda: upload_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clean up overrides
    app.dependency_overrides.clear()
