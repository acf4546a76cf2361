from pydantic import BaseModel, computed_field
from typing import Optional
from uuid import UUID
from datetime import datetime


def format_action_label(action_type: str) -> str:
    """bulk_payment_verify -> Bulk Payment Verify"""
    return " ".join(word[:1].upper() + word[1:] for word in action_type.split("_"))


class ActivityLogRead(BaseModel):
    id: UUID
    admin_id: Optional[UUID] = None
    admin_email: Optional[str] = None
    action_type: str
    entity_type: str
    entity_id: Optional[str] = None
    details: str
    created_at: datetime

    @computed_field
    @property
    def action_label(self) -> str:
        return format_action_label(self.action_type)

    class Config:
        from_attributes = True
