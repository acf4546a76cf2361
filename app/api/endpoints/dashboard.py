# app/api/endpoints/dashboard.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session, get_current_user
from app.core.rbac import require_admin
from app.models.user import User
from app.schemas.dashboard import AdminDashboardStats, UserDashboardStats
from app.services.dashboard_service import get_admin_stats, get_user_stats

router = APIRouter(tags=["Dashboard"])


@router.get("/api/admin/dashboard", response_model=AdminDashboardStats)
async def admin_dashboard(
    session: AsyncSession = Depends(get_db_session),
    _: User = Depends(require_admin),
):
    return await get_admin_stats(session)


@router.get("/api/dashboard", response_model=UserDashboardStats)
async def user_dashboard(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await get_user_stats(session, current_user.id)
