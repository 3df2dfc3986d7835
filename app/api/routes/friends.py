from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_caller, get_db
from app.core.config import settings
from app.core.session_gate import Caller
from app.schemas.users import UserProfile
from app.services.social_graph import friends_of, recommend

router = APIRouter(tags=["friends"])


@router.get("/recommendations", response_model=list[UserProfile])
async def get_recommendations(
    limit: int | None = Query(default=None, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    users = await recommend(db, caller, limit or settings.recommendation_limit)
    return [UserProfile.from_user(u) for u in users]


@router.get("/friends", response_model=list[UserProfile])
async def get_friends(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    friends = await friends_of(db, caller)
    return [UserProfile.from_user(f) for f in friends]
