# app/api/endpoints/users.py

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession
from typing import List, Optional

from app.api.deps import get_db_session, get_current_user, is_admin
from app.core.rbac import require_admin
from app.models.user import User
from app.schemas.user import UserRead, AdminSetupStatus
from app.services.auth_service import list_users, has_any_admin, claim_admin_access

router = APIRouter(prefix="/api/admin", tags=["Users"])


# -------------------------------------------------------------------
# LIST USERS (search by email, name or role)
# -------------------------------------------------------------------
@router.get("/users", response_model=List[UserRead])
async def get_all_users(
    search: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
    _: User = Depends(require_admin),
):
    return await list_users(session, search=search)


# -------------------------------------------------------------------
# FIRST-ADMIN SETUP
# -------------------------------------------------------------------
@router.get("/setup/status", response_model=AdminSetupStatus)
async def setup_status(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return AdminSetupStatus(
        has_admins=await has_any_admin(session),
        is_admin=is_admin(current_user),
    )


@router.post("/setup/claim", response_model=UserRead)
async def claim_setup(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Promotes the caller to admin while the portal has no admin yet."""
    try:
        return await claim_admin_access(session, current_user)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
