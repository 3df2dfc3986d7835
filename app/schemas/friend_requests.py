from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class RequestParty(BaseModel):
    id: str
    full_name: str
    profile_pic_url: str | None = None
    native_language: str
    learning_language: str

    @classmethod
    def from_user(cls, user) -> "RequestParty":
        return cls(
            id=str(user.id),
            full_name=user.full_name,
            profile_pic_url=user.profile_pic_url,
            native_language=user.native_language,
            learning_language=user.learning_language,
        )


class FriendRequestOut(BaseModel):
    id: str
    sender_id: str
    recipient_id: str
    status: Literal["pending", "accepted"]
    created_at: datetime

    @classmethod
    def from_request(cls, req) -> "FriendRequestOut":
        return cls(
            id=str(req.id),
            sender_id=str(req.sender_id),
            recipient_id=str(req.recipient_id),
            status=req.status.value,
            created_at=req.created_at,
        )


class IncomingFriendRequest(FriendRequestOut):
    sender: RequestParty


class OutgoingFriendRequest(FriendRequestOut):
    recipient: RequestParty
