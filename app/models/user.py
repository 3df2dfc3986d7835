from __future__ import annotations

import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base_class import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(sa.Uuid, primary_key=True, default=uuid.uuid4)

    email: Mapped[str] = mapped_column(sa.String(320), unique=True, index=True, nullable=False)
    full_name: Mapped[str] = mapped_column(sa.String(120), nullable=False)
    password_hash: Mapped[str] = mapped_column(sa.String(255), nullable=False)

    bio: Mapped[str] = mapped_column(sa.String(500), nullable=False, default="", server_default="")
    native_language: Mapped[str] = mapped_column(sa.String(60), nullable=False, default="", server_default="")
    learning_language: Mapped[str] = mapped_column(sa.String(60), nullable=False, default="", server_default="")
    location: Mapped[str] = mapped_column(sa.String(120), nullable=False, default="", server_default="")

    profile_pic_url: Mapped[str | None] = mapped_column(sa.String(500), nullable=True)
    profile_pic_public_id: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)

    is_onboarded: Mapped[bool] = mapped_column(
        sa.Boolean, nullable=False, default=False, server_default=sa.false(), index=True
    )

    created_at: Mapped[datetime] = mapped_column(sa.DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )
