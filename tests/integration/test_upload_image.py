"""
Integration tests for POST /upload-image
"""
from urllib.parse import parse_qs

import httpx
import pytest
from httpx import AsyncClient

from app.config.settings import ImgbbSettings
from app.core.dependencies import get_image_upload_service
from app.main import app
from app.services.image_upload_service import ImageUploadService


def use_upload_service(service: ImageUploadService) -> None:
    app.dependency_overrides[get_image_upload_service] = lambda: service


@pytest.mark.asyncio
async def test_upload_without_key_returns_stub(async_client: AsyncClient):
    use_upload_service(ImageUploadService(ImgbbSettings(api_key=None)))

    r = await async_client.post(
        "/upload-image",
        files={"image": ("cat.png", b"\x89PNG fake", "image/png")},
        data={"idiom": "画蛇添足"},
    )

    assert r.status_code == 200
    assert r.json()["url"] == "image_url_here"


@pytest.mark.asyncio
async def test_upload_forwards_to_imgbb(async_client: AsyncClient):
    def imgbb(request: httpx.Request):
        assert request.url.params["key"] == "secret"
        form = parse_qs(request.content.decode("ascii"))
        assert form["name"] == ["cat"]
        return httpx.Response(
            200, json={"data": {"url": "https://i.ibb.co/cat.png", "delete_url": "https://ibb.co/cat/del"}}
        )

    use_upload_service(
        ImageUploadService(ImgbbSettings(api_key="secret"), transport=httpx.MockTransport(imgbb))
    )

    r = await async_client.post("/upload-image", files={"image": ("cat.png", b"bytes", "image/png")})

    assert r.status_code == 200
    assert r.json() == {"url": "https://i.ibb.co/cat.png", "deleteUrl": "https://ibb.co/cat/del"}


@pytest.mark.asyncio
async def test_imgbb_rejection_is_502(async_client: AsyncClient):
    use_upload_service(
        ImageUploadService(
            ImgbbSettings(api_key="secret"),
            transport=httpx.MockTransport(lambda request: httpx.Response(400, json={"error": "bad"})),
        )
    )

    r = await async_client.post("/upload-image", files={"image": ("cat.png", b"bytes", "image/png")})

    assert r.status_code == 502
    body = r.json()
    assert body["error_code"] == "IMAGE_UPLOAD_FAILED"
    assert body["details"] == {"upstream_status": 400}


@pytest.mark.asyncio
async def test_upload_without_file_is_400(async_client: AsyncClient):
    use_upload_service(ImageUploadService(ImgbbSettings(api_key=None)))

    r = await async_client.post("/upload-image", data={"idiom": "x"})

    assert r.status_code == 400
