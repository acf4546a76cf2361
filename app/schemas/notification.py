from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from uuid import UUID
from datetime import datetime


class NotificationRead(BaseModel):
    id: UUID
    notification_type: str
    title: str
    message: str
    is_read: bool
    # stored as "meta" on the table
    metadata: Dict[str, Any] = Field(default_factory=dict, validation_alias="meta")
    created_at: datetime

    class Config:
        from_attributes = True
        populate_by_name = True


class AlertCounts(BaseModel):
    pending_submissions: int = 0
    unverified_payments: int = 0
    unread_messages: int = 0
    total_alerts: int = 0


class NotificationPreferences(BaseModel):
    email_submission_updates: bool = True
    email_payment_verified: bool = True
    email_admin_response: bool = True
    push_submission_updates: bool = True
    push_payment_verified: bool = True
    push_admin_response: bool = True
    sound_enabled: bool = True

    class Config:
        from_attributes = True


class NotificationPreferencesUpdate(BaseModel):
    email_submission_updates: Optional[bool] = None
    email_payment_verified: Optional[bool] = None
    email_admin_response: Optional[bool] = None
    push_submission_updates: Optional[bool] = None
    push_payment_verified: Optional[bool] = None
    push_admin_response: Optional[bool] = None
    sound_enabled: Optional[bool] = None
