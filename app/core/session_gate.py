from __future__ import annotations

import uuid
from dataclasses import dataclass

from jose import JWTError

from app.core.security import decode_access_token


class Unauthenticated(Exception):
    """Missing, malformed or expired credential."""


@dataclass(frozen=True)
class Caller:
    """Identity resolved from a verified credential, passed explicitly into core calls."""

    user_id: uuid.UUID


def resolve_caller(credential: str | None) -> Caller:
    if not credential:
        raise Unauthenticated("Not authenticated")

    try:
        payload = decode_access_token(credential)
    except JWTError as exc:
        raise Unauthenticated("Invalid token") from exc

    sub = payload.get("sub")
    if not isinstance(sub, str) or not sub:
        raise Unauthenticated("Invalid token")

    try:
        user_id = uuid.UUID(sub)
    except ValueError as exc:
        raise Unauthenticated("Invalid token") from exc

    return Caller(user_id=user_id)
