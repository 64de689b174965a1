import httpx
import pytest
import respx
from httpx import Response

from app.exceptions.custom import StorageError
from app.services.storage import StorageService

BASE_URL = "https://test.supabase.co"
UPLOAD_URL = f"{BASE_URL}/storage/v1/object/schwimmschule-photos/1700000000000.jpg"


@respx.mock
@pytest.mark.asyncio
async def test_upload_returns_public_url():
    route = respx.post(UPLOAD_URL).mock(return_value=Response(200, json={"Key": "x"}))

    async with httpx.AsyncClient() as client:
        service = StorageService(client, BASE_URL, "test-key", "schwimmschule-photos")
        url = await service.upload("1700000000000.jpg", b"jpeg-bytes", "image/jpeg")

    assert url == f"{BASE_URL}/storage/v1/object/public/schwimmschule-photos/1700000000000.jpg"
    request = route.calls.last.request
    assert request.content == b"jpeg-bytes"
    assert request.headers["Content-Type"] == "image/jpeg"


@respx.mock
@pytest.mark.asyncio
async def test_upload_error():
    respx.post(UPLOAD_URL).mock(return_value=Response(400, text="bucket not found"))

    async with httpx.AsyncClient() as client:
        service = StorageService(client, BASE_URL, "test-key", "schwimmschule-photos")
        with pytest.raises(StorageError) as exc_info:
            await service.upload("1700000000000.jpg", b"jpeg-bytes")

    assert exc_info.value.status_code == 400
