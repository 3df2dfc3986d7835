import hashlib

import httpx
import pytest

from app.services import media
from app.services.media import MediaStorageError, _signed_form, delete_media, upload_profile_picture


@pytest.fixture
def media_settings(monkeypatch):
    monkeypatch.setattr(media.settings, "cloudinary_cloud_name", "demo")
    monkeypatch.setattr(media.settings, "cloudinary_api_key", "key-123")
    monkeypatch.setattr(media.settings, "cloudinary_api_secret", "shh")
    monkeypatch.setattr(media.settings, "media_upload_base_url", "https://media.example.com/v1_1")


def test_signed_form_signs_sorted_params_with_secret(media_settings, monkeypatch):
    monkeypatch.setattr(media.time, "time", lambda: 10)

    form = _signed_form({"folder": "pics", "eager": ""})

    expected = hashlib.sha1(b"folder=pics&timestamp=10shh").hexdigest()
    assert form["signature"] == expected
    assert form["api_key"] == "key-123"
    assert form["timestamp"] == 10


@pytest.mark.anyio
async def test_upload_profile_picture_posts_signed_form(media_settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.content
        return httpx.Response(
            200,
            json={"secure_url": "https://cdn.example.com/p.png", "public_id": "profile-pictures/p"},
        )

    uploaded = await upload_profile_picture(
        b"\x89PNG",
        filename="me.png",
        content_type="image/png",
        transport=httpx.MockTransport(handler),
    )

    assert uploaded.url == "https://cdn.example.com/p.png"
    assert uploaded.public_id == "profile-pictures/p"
    assert seen["url"] == "https://media.example.com/v1_1/demo/image/upload"
    assert b'name="signature"' in seen["body"]
    assert b'name="api_key"' in seen["body"]
    assert b"profile-pictures" in seen["body"]


@pytest.mark.anyio
async def test_upload_surfaces_provider_error(media_settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"message": "Invalid image file"}})

    with pytest.raises(MediaStorageError, match="Invalid image file"):
        await upload_profile_picture(
            b"nope",
            filename="x.png",
            content_type="image/png",
            transport=httpx.MockTransport(handler),
        )


@pytest.mark.anyio
async def test_delete_media_posts_public_id(media_settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.content.decode()
        return httpx.Response(200, json={"result": "ok"})

    await delete_media("profile-pictures/p", transport=httpx.MockTransport(handler))

    assert seen["url"].endswith("/demo/image/destroy")
    assert "public_id=profile-pictures%2Fp" in seen["body"]


@pytest.mark.anyio
async def test_media_calls_fail_when_not_configured(monkeypatch):
    monkeypatch.setattr(media.settings, "cloudinary_cloud_name", None)
    with pytest.raises(MediaStorageError, match="not configured"):
        await delete_media("anything")
