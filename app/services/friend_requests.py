from __future__ import annotations

import logging
from uuid import UUID

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.friend_request import FriendRequest, FriendRequestStatus
from app.models.friendship import Friendship
from app.services.directory import is_friend
from app.services.errors import (
    AlreadyFriends,
    DuplicateRequest,
    Forbidden,
    InvalidState,
    InvalidTarget,
    NotFound,
)

logger = logging.getLogger(__name__)


def _pair(a: UUID, b: UUID) -> tuple[UUID, UUID]:
    return (a, b) if a < b else (b, a)


async def find_active_request(db: AsyncSession, a: UUID, b: UUID) -> FriendRequest | None:
    # No delete/reject path exists, so every stored row is active.
    low, high = _pair(a, b)
    q = sa.select(FriendRequest).where(
        FriendRequest.pair_low_id == low,
        FriendRequest.pair_high_id == high,
    )
    return (await db.execute(q)).scalar_one_or_none()


async def create_request(db: AsyncSession, sender_id: UUID, recipient_id: UUID) -> FriendRequest:
    if sender_id == recipient_id:
        raise InvalidTarget()

    if await is_friend(db, sender_id, recipient_id):
        raise AlreadyFriends()

    if await find_active_request(db, sender_id, recipient_id) is not None:
        raise DuplicateRequest()

    low, high = _pair(sender_id, recipient_id)
    request = FriendRequest(
        sender_id=sender_id,
        recipient_id=recipient_id,
        pair_low_id=low,
        pair_high_id=high,
        status=FriendRequestStatus.pending,
    )
    db.add(request)
    try:
        # The pair unique constraint settles concurrent creates for the same pair.
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        raise DuplicateRequest() from exc

    logger.info("friend request %s created: %s -> %s", request.id, sender_id, recipient_id)
    return request


async def accept_request(db: AsyncSession, request_id: UUID, acting_user_id: UUID) -> FriendRequest:
    # Lock the request row so the status flip and friend-list writes are serialized.
    request = (
        await db.execute(
            sa.select(FriendRequest)
            .where(FriendRequest.id == request_id)
            .with_for_update()
        )
    ).scalar_one_or_none()

    if request is None:
        raise NotFound()

    if request.recipient_id != acting_user_id:
        raise Forbidden("Only the recipient can accept this friend request")

    if request.status != FriendRequestStatus.pending:
        raise InvalidState()

    request.status = FriendRequestStatus.accepted
    db.add_all(
        [
            Friendship(user_id=request.sender_id, friend_id=request.recipient_id, request_id=request.id),
            Friendship(user_id=request.recipient_id, friend_id=request.sender_id, request_id=request.id),
        ]
    )
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        raise InvalidState() from exc

    logger.info("friend request %s accepted by %s", request.id, acting_user_id)
    return request


async def list_incoming(db: AsyncSession, user_id: UUID) -> list[FriendRequest]:
    q = (
        sa.select(FriendRequest)
        .options(selectinload(FriendRequest.sender))
        .where(
            FriendRequest.recipient_id == user_id,
            FriendRequest.status == FriendRequestStatus.pending,
        )
        .order_by(FriendRequest.created_at.desc(), FriendRequest.id.desc())
    )
    return list((await db.execute(q)).scalars().all())


async def list_outgoing(db: AsyncSession, user_id: UUID) -> list[FriendRequest]:
    q = (
        sa.select(FriendRequest)
        .options(selectinload(FriendRequest.recipient))
        .where(
            FriendRequest.sender_id == user_id,
            FriendRequest.status == FriendRequestStatus.pending,
        )
        .order_by(FriendRequest.created_at.desc(), FriendRequest.id.desc())
    )
    return list((await db.execute(q)).scalars().all())
