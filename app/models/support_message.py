# app/models/support_message.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import Text, DateTime, ForeignKey, Uuid
from sqlalchemy import Enum as PGEnum
from datetime import datetime
import uuid
from typing import Optional

from app.models.enums import MessageStatus
from app.models.user import utcnow


class SupportMessage(SQLModel, table=True):
    __tablename__ = "support_messages"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    user_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    )

    subject: str = Field(nullable=False)
    message: str = Field(sa_column=Column(Text, nullable=False))

    status: MessageStatus = Field(
        default=MessageStatus.Open,
        sa_column=Column(
            PGEnum(MessageStatus, name="message_status", values_callable=lambda e: [m.value for m in e]),
            nullable=False,
        )
    )

    admin_response: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
