from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_caller, get_db
from app.api.http_errors import permission_error, social_graph_error
from app.core.session_gate import Caller
from app.schemas.friend_requests import (
    FriendRequestOut,
    IncomingFriendRequest,
    OutgoingFriendRequest,
    RequestParty,
)
from app.services.social_graph import (
    accept_friend_request,
    incoming_requests,
    outgoing_requests,
    send_friend_request,
)

router = APIRouter(prefix="/friend-requests", tags=["friend-requests"])


@router.get("/incoming", response_model=list[IncomingFriendRequest])
async def list_incoming_route(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    rows = await incoming_requests(db, caller)
    return [
        IncomingFriendRequest(
            **FriendRequestOut.from_request(r).model_dump(),
            sender=RequestParty.from_user(r.sender),
        )
        for r in rows
    ]


@router.get("/outgoing", response_model=list[OutgoingFriendRequest])
async def list_outgoing_route(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    rows = await outgoing_requests(db, caller)
    return [
        OutgoingFriendRequest(
            **FriendRequestOut.from_request(r).model_dump(),
            recipient=RequestParty.from_user(r.recipient),
        )
        for r in rows
    ]


@router.post("/{target_id}", response_model=FriendRequestOut, status_code=201)
async def send_request_route(
    target_id: UUID,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    try:
        request = await send_friend_request(db, caller, target_id)
        await db.commit()
    except ValueError as e:
        await db.rollback()
        raise social_graph_error(e) from e
    return FriendRequestOut.from_request(request)


@router.put("/{request_id}/accept", response_model=FriendRequestOut)
async def accept_request_route(
    request_id: UUID,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    try:
        request = await accept_friend_request(db, caller, request_id)
        await db.commit()
    except PermissionError as e:
        await db.rollback()
        raise permission_error(e) from e
    except ValueError as e:
        await db.rollback()
        raise social_graph_error(e) from e
    return FriendRequestOut.from_request(request)
