from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_db
from app.core.config import settings
from app.models.user import User
from app.schemas.users import ProfilePictureResponse
from app.services.directory import set_profile_picture
from app.services.media import MediaStorageError, delete_media, upload_profile_picture

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


async def _discard_old_picture(public_id: str | None) -> None:
    if not public_id:
        return
    try:
        await delete_media(public_id)
    except MediaStorageError:
        logger.warning("could not delete old profile picture %s", public_id, exc_info=True)


@router.post("/profile-picture", response_model=ProfilePictureResponse)
async def upload_profile_picture_route(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not settings.media_storage_configured():
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Media storage is not configured")

    content_type = file.content_type or ""
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are allowed")

    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if len(data) > settings.media_max_bytes:
        raise HTTPException(status_code=413, detail="File too large")

    try:
        uploaded = await upload_profile_picture(data, filename=file.filename or "upload", content_type=content_type)
    except MediaStorageError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e

    old_public_id = user.profile_pic_public_id
    await set_profile_picture(db, user, url=uploaded.url, public_id=uploaded.public_id)
    await db.commit()

    await _discard_old_picture(old_public_id)
    return ProfilePictureResponse(profile_pic_url=user.profile_pic_url)


@router.delete("/profile-picture", response_model=ProfilePictureResponse)
async def remove_profile_picture_route(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not user.profile_pic_url:
        raise HTTPException(status_code=400, detail="No profile picture to remove")

    old_public_id = user.profile_pic_public_id
    await set_profile_picture(db, user, url=None, public_id=None)
    await db.commit()

    await _discard_old_picture(old_public_id)
    return ProfilePictureResponse(profile_pic_url=None)
