# app/models/submission.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import Integer, Text, DateTime, Boolean, ForeignKey, Uuid
from sqlalchemy import Enum as PGEnum
from datetime import datetime
import uuid
from typing import Optional

from app.models.enums import ServiceType, SubmissionStatus
from app.models.user import utcnow


def _values(enum_cls):
    return [m.value for m in enum_cls]


class Submission(SQLModel, table=True):
    __tablename__ = "submissions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    user_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    )

    name: str = Field(nullable=False)
    course: str = Field(nullable=False)
    call_up: str = Field(nullable=False)
    state_of_origin: str = Field(nullable=False)
    state_of_choices: str = Field(nullable=False)
    state_code: Optional[str] = None

    service_type: Optional[ServiceType] = Field(
        default=None,
        sa_column=Column(PGEnum(ServiceType, name="service_type", values_callable=_values), nullable=True)
    )

    # Always derived from (service_type, state_of_choices); never trusted from the client
    calculated_amount: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0)
    )

    # Optional NYSC portal login the applicant hands over for the posting request
    nysc_email: Optional[str] = None
    nysc_password: Optional[str] = None

    payment_proof_url: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True)
    )

    status: SubmissionStatus = Field(
        default=SubmissionStatus.Pending,
        sa_column=Column(
            PGEnum(SubmissionStatus, name="submission_status", values_callable=_values),
            nullable=False,
        )
    )

    payment_verified: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False)
    )

    remarks: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    admin_notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
