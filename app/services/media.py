from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx
from cloudinary.utils import api_sign_request

from app.core.config import settings

logger = logging.getLogger(__name__)

PROFILE_PICTURE_FOLDER = "profile-pictures"
PROFILE_PICTURE_TRANSFORMATION = "c_fill,g_face,h_400,w_400/q_auto:good"


class MediaStorageError(RuntimeError):
    pass


@dataclass(frozen=True)
class UploadedMedia:
    url: str
    public_id: str


def _endpoint(action: str) -> str:
    base = settings.media_upload_base_url.rstrip("/")
    return f"{base}/{settings.cloudinary_cloud_name}/image/{action}"


def _signed_form(params: dict[str, Any]) -> dict[str, Any]:
    if not settings.media_storage_configured():
        raise MediaStorageError("Media storage is not configured")
    signed = dict(params, timestamp=int(time.time()))
    signed["signature"] = api_sign_request(signed, settings.cloudinary_api_secret or "")
    signed["api_key"] = settings.cloudinary_api_key
    return signed


def _provider_message(exc: httpx.HTTPStatusError) -> str:
    message = "Media provider rejected the request"
    try:
        body = exc.response.json()
    except ValueError:
        raw = exc.response.text.strip()
        return raw or message
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"].strip() or message
    return message


async def _post(action: str, data: dict[str, Any], files=None, transport: httpx.AsyncBaseTransport | None = None) -> dict:
    async with httpx.AsyncClient(timeout=30, transport=transport) as client:
        try:
            response = await client.post(_endpoint(action), data=data, files=files)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise MediaStorageError(_provider_message(exc)) from exc
        except httpx.RequestError as exc:
            raise MediaStorageError("Could not reach media provider") from exc

    payload = response.json()
    if not isinstance(payload, dict):
        raise MediaStorageError("Unexpected media provider response")
    return payload


async def upload_profile_picture(
    data: bytes,
    *,
    filename: str,
    content_type: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> UploadedMedia:
    form = _signed_form(
        {
            "folder": PROFILE_PICTURE_FOLDER,
            "transformation": PROFILE_PICTURE_TRANSFORMATION,
        }
    )
    payload = await _post(
        "upload",
        form,
        files={"file": (filename, data, content_type)},
        transport=transport,
    )

    url = payload.get("secure_url")
    public_id = payload.get("public_id")
    if not isinstance(url, str) or not isinstance(public_id, str):
        raise MediaStorageError("Unexpected media provider response")
    return UploadedMedia(url=url, public_id=public_id)


async def delete_media(public_id: str, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
    payload = await _post("destroy", _signed_form({"public_id": public_id}), transport=transport)
    result = payload.get("result")
    if result not in ("ok", "not found"):
        logger.warning("media provider returned %r deleting %s", result, public_id)
