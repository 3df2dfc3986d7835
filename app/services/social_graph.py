from __future__ import annotations

from uuid import UUID

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.session_gate import Caller
from app.models.friend_request import FriendRequest
from app.models.friendship import Friendship
from app.models.user import User
from app.services import friend_requests as ledger
from app.services.directory import require_onboarded_user
from app.services.errors import InvalidTarget


async def recommend(db: AsyncSession, caller: Caller, limit: int) -> list[User]:
    me = caller.user_id

    friends = sa.select(Friendship.friend_id).where(Friendship.user_id == me)
    requested = sa.select(FriendRequest.recipient_id).where(FriendRequest.sender_id == me)
    requested_by = sa.select(FriendRequest.sender_id).where(FriendRequest.recipient_id == me)

    q = (
        sa.select(User)
        .where(
            User.id != me,
            User.is_onboarded.is_(True),
            User.id.not_in(friends),
            User.id.not_in(requested),
            User.id.not_in(requested_by),
        )
        # Stable order for an unchanged snapshot.
        .order_by(User.created_at.asc(), User.id.asc())
        .limit(limit)
    )
    return list((await db.execute(q)).scalars().all())


async def friends_of(db: AsyncSession, caller: Caller) -> list[User]:
    q = (
        sa.select(User)
        .join(Friendship, Friendship.friend_id == User.id)
        .where(Friendship.user_id == caller.user_id)
        .order_by(Friendship.created_at.asc(), Friendship.id.asc())
    )
    return list((await db.execute(q)).scalars().all())


async def send_friend_request(db: AsyncSession, caller: Caller, target_id: UUID) -> FriendRequest:
    if target_id == caller.user_id:
        raise InvalidTarget()
    await require_onboarded_user(db, target_id)
    return await ledger.create_request(db, caller.user_id, target_id)


async def accept_friend_request(db: AsyncSession, caller: Caller, request_id: UUID) -> FriendRequest:
    return await ledger.accept_request(db, request_id, caller.user_id)


async def incoming_requests(db: AsyncSession, caller: Caller) -> list[FriendRequest]:
    return await ledger.list_incoming(db, caller.user_id)


async def outgoing_requests(db: AsyncSession, caller: Caller) -> list[FriendRequest]:
    return await ledger.list_outgoing(db, caller.user_id)
