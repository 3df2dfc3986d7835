import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.core.config import settings
from app.core.security import create_access_token
from app.core.session_gate import Caller, Unauthenticated, resolve_caller


def test_resolve_caller_returns_subject_id() -> None:
    user_id = uuid.uuid4()
    assert resolve_caller(create_access_token(str(user_id))) == Caller(user_id=user_id)


@pytest.mark.parametrize("credential", [None, "", "garbage"])
def test_resolve_caller_rejects_missing_or_malformed(credential) -> None:
    with pytest.raises(Unauthenticated):
        resolve_caller(credential)


def test_resolve_caller_rejects_expired_token() -> None:
    past = datetime.now(timezone.utc) - timedelta(hours=1)
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "exp": int(past.timestamp())},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(Unauthenticated):
        resolve_caller(token)


def test_resolve_caller_rejects_wrong_signature_and_bad_subject() -> None:
    forged = jwt.encode({"sub": str(uuid.uuid4())}, "other-secret", algorithm="HS256")
    with pytest.raises(Unauthenticated):
        resolve_caller(forged)

    with pytest.raises(Unauthenticated):
        resolve_caller(create_access_token("not-a-uuid"))
