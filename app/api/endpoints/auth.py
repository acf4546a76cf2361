# app/api/endpoints/auth.py

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.schemas.auth import LoginRequest, RegisterRequest, TokenWithUser
from app.schemas.user import UserRead
from app.models.user import User, UserRole
from app.services.auth_service import (
    authenticate_user,
    create_login_response,
    create_user,
)
from app.core.rate_limiter import limiter, LOGIN_RATE
from app.api.deps import get_db_session, get_current_user

router = APIRouter(prefix="/api/auth", tags=["Auth"])


# -------------------------------------------------------------------
# REGISTER (self sign-up, always a regular user)
# -------------------------------------------------------------------
@router.post("/register", response_model=TokenWithUser, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    session: AsyncSession = Depends(get_db_session),
):
    try:
        user = await create_user(
            session=session,
            full_name=data.full_name.strip(),
            email=data.email,
            password=data.password,
            role=UserRole.User,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return create_login_response(user)


# -------------------------------------------------------------------
# LOGIN
# -------------------------------------------------------------------
@router.post("/login", response_model=TokenWithUser)
@limiter.limit(LOGIN_RATE)
async def login(
    request: Request,
    payload: LoginRequest,
    session: AsyncSession = Depends(get_db_session)
):
    user = await authenticate_user(session, payload.email, payload.password)

    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return create_login_response(user)


# -------------------------------------------------------------------
# CURRENT USER
# -------------------------------------------------------------------
@router.get("/me", response_model=UserRead)
async def me(current_user: User = Depends(get_current_user)):
    return current_user
