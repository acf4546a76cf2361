# app/services/auth_service.py

from sqlmodel import select
from sqlalchemy import String, cast, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from loguru import logger
import uuid

from app.models.user import User
from app.models.enums import UserRole
from app.core.config import settings
from app.core.security import (
    hash_password,
    verify_password,
    create_access_token,
)
from app.schemas.auth import TokenWithUser
from app.schemas.user import UserRead


# ============================================================================
# FETCH USER BY EMAIL
# ============================================================================
async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(func.lower(User.email) == email.lower()))
    return result.scalar_one_or_none()


# ============================================================================
# FETCH USER BY ID
# ============================================================================
async def get_user_by_id(session: AsyncSession, user_id: str | uuid.UUID) -> User | None:
    try:
        user_uuid = user_id if isinstance(user_id, uuid.UUID) else uuid.UUID(str(user_id))
    except ValueError:
        return None
    return await session.get(User, user_uuid)


# ============================================================================
# CREATE USER
# ============================================================================
async def create_user(
    session: AsyncSession,
    full_name: str,
    email: str,
    password: str,
    role: UserRole = UserRole.User,
) -> User:

    if await get_user_by_email(session, email):
        raise ValueError("User with this email already exists")

    user = User(
        id=uuid.uuid4(),
        full_name=full_name,
        email=email.lower(),
        password_hash=hash_password(password),
        role=role,
    )

    session.add(user)

    try:
        await session.commit()
        await session.refresh(user)
        return user

    except IntegrityError:
        await session.rollback()
        raise ValueError("User with this email already exists")


# ============================================================================
# AUTHENTICATE
# ============================================================================
async def authenticate_user(session: AsyncSession, email: str, password: str) -> User | None:
    user = await get_user_by_email(session, email)
    if not user:
        return None

    if not verify_password(password, user.password_hash):
        return None

    return user


# ============================================================================
# CREATE LOGIN RESPONSE
# ============================================================================
def create_login_response(user: User) -> TokenWithUser:
    role_str = user.role.value if isinstance(user.role, UserRole) else str(user.role)

    token = create_access_token(subject=str(user.id), data={"role": role_str})

    return TokenWithUser(
        access_token=token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=UserRead.model_validate(user),
    )


# ============================================================================
# CHANGE PASSWORD
# ============================================================================
async def change_password(session: AsyncSession, user: User, old_password: str, new_password: str) -> None:
    if not verify_password(old_password, user.password_hash):
        raise ValueError("Old password incorrect")

    if old_password == new_password:
        raise ValueError("New password must be different")

    user.password_hash = hash_password(new_password)
    session.add(user)
    await session.commit()


# ============================================================================
# ADMIN SETUP (first admin claims the portal)
# ============================================================================
async def has_any_admin(session: AsyncSession) -> bool:
    result = await session.execute(select(User.id).where(User.role == UserRole.Admin).limit(1))
    return result.first() is not None


async def claim_admin_access(session: AsyncSession, user: User) -> User:
    """
    Promote `user` to admin, but only while the portal has no admin at all.
    """
    if user.role == UserRole.Admin:
        return user

    if await has_any_admin(session):
        raise PermissionError("An administrator already exists for this portal")

    user.role = UserRole.Admin
    session.add(user)
    await session.commit()
    await session.refresh(user)

    logger.info(f"Admin access claimed by {user.email}")
    return user


# ============================================================================
# LIST USERS
# ============================================================================
async def list_users(session: AsyncSession, search: str | None = None) -> list[User]:
    query = select(User).order_by(User.created_at.desc())

    if search:
        pattern = f"%{search.lower()}%"
        query = query.where(
            or_(
                func.lower(User.email).like(pattern),
                func.lower(User.full_name).like(pattern),
                func.lower(cast(User.role, String)).like(pattern),
            )
        )

    result = await session.execute(query)
    return list(result.scalars().all())
