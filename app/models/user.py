# app/models/user.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import DateTime
from sqlalchemy import Enum as PGEnum
from datetime import datetime, timezone
import uuid

from app.models.enums import UserRole


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    full_name: str = Field(nullable=False)
    email: str = Field(nullable=False, index=True, unique=True)
    password_hash: str = Field(nullable=False)

    # admin | user (replaces the separate user_roles lookup)
    role: UserRole = Field(
        default=UserRole.User,
        sa_column=Column(
            PGEnum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
            nullable=False,
        )
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
