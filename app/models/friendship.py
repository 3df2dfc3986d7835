from __future__ import annotations

import uuid
from datetime import datetime

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base_class import Base
from app.models.user import _utcnow


class Friendship(Base):
    """One side of a friendship: `friend_id` appears in `user_id`'s friend list.

    Accepting a request always writes both sides in the same transaction.
    """

    __tablename__ = "friendships"

    id: Mapped[uuid.UUID] = mapped_column(sa.Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(sa.Uuid, sa.ForeignKey("users.id"), nullable=False, index=True)
    friend_id: Mapped[uuid.UUID] = mapped_column(sa.Uuid, sa.ForeignKey("users.id"), nullable=False, index=True)

    request_id: Mapped[uuid.UUID] = mapped_column(sa.Uuid, sa.ForeignKey("friend_requests.id"), nullable=False)

    created_at: Mapped[datetime] = mapped_column(sa.DateTime(timezone=True), default=_utcnow, nullable=False)

    __table_args__ = (
        sa.UniqueConstraint("user_id", "friend_id", name="uq_friendships_user_friend"),
        sa.CheckConstraint("user_id <> friend_id", name="ck_friendships_not_self"),
    )
