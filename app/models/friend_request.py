from __future__ import annotations

import enum
import uuid
from datetime import datetime

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base
from app.models.user import _utcnow


class FriendRequestStatus(str, enum.Enum):
    pending = "pending"
    accepted = "accepted"


class FriendRequest(Base):
    __tablename__ = "friend_requests"

    id: Mapped[uuid.UUID] = mapped_column(sa.Uuid, primary_key=True, default=uuid.uuid4)

    sender_id: Mapped[uuid.UUID] = mapped_column(sa.Uuid, sa.ForeignKey("users.id"), nullable=False, index=True)
    recipient_id: Mapped[uuid.UUID] = mapped_column(sa.Uuid, sa.ForeignKey("users.id"), nullable=False, index=True)

    # Unordered pair key: (min, max) of sender/recipient.
    pair_low_id: Mapped[uuid.UUID] = mapped_column(sa.Uuid, nullable=False)
    pair_high_id: Mapped[uuid.UUID] = mapped_column(sa.Uuid, nullable=False)

    status: Mapped[FriendRequestStatus] = mapped_column(
        sa.Enum(FriendRequestStatus, name="friend_request_status", native_enum=False, length=16),
        nullable=False,
        default=FriendRequestStatus.pending,
    )

    created_at: Mapped[datetime] = mapped_column(sa.DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    sender = relationship("User", foreign_keys=[sender_id], lazy="raise")
    recipient = relationship("User", foreign_keys=[recipient_id], lazy="raise")

    __table_args__ = (
        sa.UniqueConstraint("pair_low_id", "pair_high_id", name="uq_friend_requests_pair"),
        sa.CheckConstraint("sender_id <> recipient_id", name="ck_friend_requests_not_self"),
    )
