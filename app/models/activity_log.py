#app/models/activity_log.py

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, Text
from typing import Optional
from uuid import UUID, uuid4
from datetime import datetime

from app.models.user import utcnow


class ActivityLog(SQLModel, table=True):
    __tablename__ = "activity_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    admin_id: Optional[UUID] = Field(default=None, foreign_key="users.id", ondelete="SET NULL")

    # Snapshot, survives the admin account being deleted
    admin_email: Optional[str] = None

    # ActivityAction / EntityType values, stored as plain strings
    action_type: str = Field(index=True)
    entity_type: str
    entity_id: Optional[str] = None

    details: str = Field(sa_column=Column(Text, nullable=False))

    created_at: datetime = Field(default_factory=utcnow, index=True)
