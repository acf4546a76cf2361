from pydantic import BaseModel, Field, field_validator
from typing import Optional
from uuid import UUID
from datetime import datetime

from app.models.enums import MessageStatus


class SupportMessageCreate(BaseModel):
    subject: str = Field(min_length=3, max_length=200)
    message: str = Field(min_length=10, max_length=2000)

    @field_validator("subject", "message", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value


class SupportMessageRead(BaseModel):
    id: UUID
    user_id: UUID
    subject: str
    message: str
    status: MessageStatus
    admin_response: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SupportResponse(BaseModel):
    admin_response: str = Field(min_length=1)
    status: MessageStatus = MessageStatus.Closed
