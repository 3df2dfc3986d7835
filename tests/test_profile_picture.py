import pytest

from app.api.routes import users as users_routes
from app.services.media import UploadedMedia

pytestmark = pytest.mark.anyio


@pytest.fixture
def fake_media(monkeypatch):
    calls = {"uploaded": [], "deleted": []}
    counter = iter(range(1, 100))

    async def _upload(data, *, filename, content_type):
        n = next(counter)
        calls["uploaded"].append(filename)
        return UploadedMedia(url=f"https://cdn.example.com/{n}.png", public_id=f"profile-pictures/{n}")

    async def _delete(public_id):
        calls["deleted"].append(public_id)

    monkeypatch.setattr(users_routes.settings, "cloudinary_cloud_name", "demo")
    monkeypatch.setattr(users_routes.settings, "cloudinary_api_key", "key")
    monkeypatch.setattr(users_routes.settings, "cloudinary_api_secret", "secret")
    monkeypatch.setattr(users_routes, "upload_profile_picture", _upload)
    monkeypatch.setattr(users_routes, "delete_media", _delete)
    return calls


async def test_upload_replace_and_remove_profile_picture(client, user_factory, fake_media):
    await user_factory(client)

    r = await client.post("/users/profile-picture", files={"file": ("a.png", b"img", "image/png")})
    assert r.status_code == 200, r.text
    assert r.json()["profile_pic_url"] == "https://cdn.example.com/1.png"

    r = await client.post("/users/profile-picture", files={"file": ("b.png", b"img", "image/png")})
    assert r.json()["profile_pic_url"] == "https://cdn.example.com/2.png"
    assert fake_media["deleted"] == ["profile-pictures/1"]

    assert (await client.get("/me")).json()["profile_pic_url"] == "https://cdn.example.com/2.png"

    r = await client.delete("/users/profile-picture")
    assert r.status_code == 200
    assert r.json()["profile_pic_url"] is None
    assert fake_media["deleted"] == ["profile-pictures/1", "profile-pictures/2"]

    r = await client.delete("/users/profile-picture")
    assert r.status_code == 400


async def test_upload_rejects_non_images(client, user_factory, fake_media):
    await user_factory(client)
    r = await client.post("/users/profile-picture", files={"file": ("a.txt", b"hello", "text/plain")})
    assert r.status_code == 400
    assert fake_media["uploaded"] == []


async def test_upload_unavailable_without_media_config(client, user_factory, monkeypatch):
    monkeypatch.setattr(users_routes.settings, "cloudinary_cloud_name", None)
    await user_factory(client)
    r = await client.post("/users/profile-picture", files={"file": ("a.png", b"img", "image/png")})
    assert r.status_code == 503
