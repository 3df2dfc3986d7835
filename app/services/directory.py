from __future__ import annotations

from uuid import UUID

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.friendship import Friendship
from app.models.user import User
from app.services.errors import NotFound


async def get_user(db: AsyncSession, user_id: UUID) -> User | None:
    return (await db.execute(sa.select(User).where(User.id == user_id))).scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    return (await db.execute(sa.select(User).where(User.email == email))).scalar_one_or_none()


async def require_onboarded_user(db: AsyncSession, user_id: UUID) -> User:
    user = await get_user(db, user_id)
    if user is None or not user.is_onboarded:
        raise NotFound()
    return user


async def is_friend(db: AsyncSession, user_id: UUID, other_id: UUID) -> bool:
    q = sa.select(sa.literal(True)).select_from(Friendship).where(
        Friendship.user_id == user_id,
        Friendship.friend_id == other_id,
    )
    return (await db.execute(q)).scalar_one_or_none() is True


async def complete_onboarding(
    db: AsyncSession,
    user: User,
    *,
    full_name: str,
    bio: str,
    native_language: str,
    learning_language: str,
    location: str,
) -> User:
    user.full_name = full_name
    user.bio = bio
    user.native_language = native_language
    user.learning_language = learning_language
    user.location = location
    user.is_onboarded = True
    await db.flush()
    return user


async def set_profile_picture(db: AsyncSession, user: User, *, url: str | None, public_id: str | None) -> User:
    user.profile_pic_url = url
    user.profile_pic_public_id = public_id
    await db.flush()
    return user
