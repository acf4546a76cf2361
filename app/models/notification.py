# app/models/notification.py

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON, Text
from typing import Optional, Dict, Any
from uuid import UUID, uuid4
from datetime import datetime

from app.models.user import utcnow


class NotificationHistory(SQLModel, table=True):
    __tablename__ = "notification_history"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True, ondelete="CASCADE")

    # status_change | payment_verified | admin_response
    notification_type: str
    title: str
    message: str = Field(sa_column=Column(Text, nullable=False))
    is_read: bool = Field(default=False)

    # {"submission_id": "...", "status": "..."} or {"message_id": "..."}
    # "metadata" is reserved on declarative models
    meta: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    created_at: datetime = Field(default_factory=utcnow, index=True)


class NotificationPreference(SQLModel, table=True):
    __tablename__ = "notification_preferences"

    user_id: UUID = Field(foreign_key="users.id", primary_key=True, ondelete="CASCADE")

    email_submission_updates: bool = True
    email_payment_verified: bool = True
    email_admin_response: bool = True
    push_submission_updates: bool = True
    push_payment_verified: bool = True
    push_admin_response: bool = True
    sound_enabled: bool = True

    updated_at: Optional[datetime] = Field(default_factory=utcnow)
