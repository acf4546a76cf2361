# app/schemas/submission.py

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List, Literal
from uuid import UUID
from datetime import datetime

from app.models.enums import ServiceType, SubmissionStatus


# ============================================================
# USER -> posting request form (payment proof travels separately)
# ============================================================
class SubmissionCreate(BaseModel):
    service_type: ServiceType
    name: str = Field(min_length=2, max_length=100)
    course: str = Field(min_length=2, max_length=100)
    call_up: str = Field(min_length=2, max_length=50)
    state_of_origin: str = Field(min_length=2, max_length=50)
    state_of_choices: str = Field(min_length=2, max_length=200)
    state_code: Optional[str] = None
    nysc_email: Optional[EmailStr] = None
    nysc_password: Optional[str] = None

    @field_validator("state_code", "nysc_email", "nysc_password", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


# ============================================================
# SUBMISSION READ (owner view)
# ============================================================
class SubmissionRead(BaseModel):
    id: UUID
    user_id: UUID
    name: str
    course: str
    call_up: str
    state_of_origin: str
    state_of_choices: str
    state_code: Optional[str] = None
    service_type: Optional[ServiceType] = None
    calculated_amount: int
    payment_proof_url: Optional[str] = None
    status: SubmissionStatus
    payment_verified: bool
    remarks: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ============================================================
# ADMIN READ (includes handed-over credentials + internal notes)
# ============================================================
class SubmissionAdminRead(SubmissionRead):
    nysc_email: Optional[str] = None
    nysc_password: Optional[str] = None
    admin_notes: Optional[str] = None


# ============================================================
# ADMIN REVIEW
# ============================================================
class SubmissionReview(BaseModel):
    status: Optional[SubmissionStatus] = None
    payment_verified: Optional[bool] = None
    remarks: Optional[str] = None
    admin_notes: Optional[str] = None


class BulkSubmissionAction(BaseModel):
    ids: List[UUID] = Field(min_length=1)
    action: Literal["approve", "reject", "verify_payment"]


class BulkActionResult(BaseModel):
    action: str
    updated: List[UUID]
    missing: List[UUID]
