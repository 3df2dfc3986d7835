from __future__ import annotations

from collections.abc import Mapping

from fastapi import HTTPException, status

from app.core.session_gate import Unauthenticated


# Status and user-facing detail for each social graph error code.
SOCIAL_GRAPH_STATUSES: dict[str, int] = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "invalid_target": status.HTTP_400_BAD_REQUEST,
    "duplicate_request": status.HTTP_409_CONFLICT,
    "already_friends": status.HTTP_409_CONFLICT,
    "invalid_state": status.HTTP_409_CONFLICT,
}

SOCIAL_GRAPH_DETAILS: dict[str, str] = {
    "not_found": "User or friend request not found",
    "invalid_target": "You cannot send a friend request to yourself",
    "duplicate_request": "A friend request already exists between these users",
    "already_friends": "You are already friends with this user",
    "invalid_state": "Friend request is no longer pending",
}


def unauthenticated_error(exc: Unauthenticated) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc) or "Not authenticated")


def permission_error(exc: PermissionError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc) or "Forbidden")


def value_error(
    exc: ValueError,
    *,
    code_statuses: Mapping[str, int] | None = None,
    detail_overrides: Mapping[str, str] | None = None,
    default_status: int = 400,
    default_detail: str | None = None,
) -> HTTPException:
    raw_detail = str(exc)

    if code_statuses and raw_detail in code_statuses:
        detail = (
            detail_overrides[raw_detail]
            if detail_overrides and raw_detail in detail_overrides
            else raw_detail
        )
        return HTTPException(status_code=code_statuses[raw_detail], detail=detail)

    return HTTPException(
        status_code=default_status,
        detail=default_detail if default_detail is not None else raw_detail,
    )


def social_graph_error(exc: ValueError) -> HTTPException:
    return value_error(
        exc,
        code_statuses=SOCIAL_GRAPH_STATUSES,
        detail_overrides=SOCIAL_GRAPH_DETAILS,
        default_detail="Could not complete friend request",
    )
