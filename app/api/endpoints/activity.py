# app/api/endpoints/activity.py

from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession
from typing import List

from app.api.deps import get_db_session
from app.core.rbac import require_admin
from app.models.user import User
from app.schemas.activity import ActivityLogRead
from app.services.activity_service import list_activity

router = APIRouter(prefix="/api/admin", tags=["Activity Log"])


@router.get("/activity", response_model=List[ActivityLogRead])
async def get_activity(
    limit: int = Query(10, ge=1, le=500),
    session: AsyncSession = Depends(get_db_session),
    _: User = Depends(require_admin),
):
    """Admin activity trail, newest first."""
    return await list_activity(session, limit=limit)
