from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Cookie, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.http_errors import unauthenticated_error
from app.core.session_gate import Caller, Unauthenticated, resolve_caller
from app.db.session import get_db_session
from app.models.user import User
from app.services.directory import get_user

COOKIE_NAME = "access_token"


async def get_db(session: AsyncSession = Depends(get_db_session)) -> AsyncGenerator[AsyncSession, None]:
    yield session


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    access_token: str | None = Cookie(default=None, alias=COOKIE_NAME),
) -> User:
    try:
        caller = resolve_caller(access_token)
    except Unauthenticated as exc:
        raise unauthenticated_error(exc) from exc

    user = await get_user(db, caller.user_id)
    if not user:
        # Stale cookie after the account or database went away.
        raise unauthenticated_error(Unauthenticated("User not found"))

    return user


async def get_caller(user: User = Depends(get_current_user)) -> Caller:
    return Caller(user_id=user.id)
