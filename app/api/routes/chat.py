from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_caller
from app.core.session_gate import Caller

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/token")
async def chat_token(caller: Caller = Depends(get_caller)):
    # Messaging transport is not wired up; the route only reserves the path.
    raise HTTPException(status_code=status.HTTP_501_NOT_IMPLEMENTED, detail="Chat is not available")
