# app/services/submission_service.py

from dataclasses import dataclass, field
from typing import Optional, List
from uuid import UUID
from loguru import logger
from sqlmodel import select
from sqlalchemy import String, cast, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from app.models.enums import ActivityAction, NotificationType, SubmissionStatus
from app.models.submission import Submission
from app.models.user import User, utcnow
from app.schemas.submission import SubmissionCreate, SubmissionReview
from app.services.notification_service import add_notification
from app.services.pricing_service import calculate_fee, display_name, format_naira


STATUS_LABELS = {
    SubmissionStatus.Pending: "Pending",
    SubmissionStatus.InProgress: "In Progress",
    SubmissionStatus.Approved: "Approved",
    SubmissionStatus.Completed: "Completed",
    SubmissionStatus.Rejected: "Rejected",
}

BULK_ACTIONS = {
    "approve": (ActivityAction.BulkApprove, {"status": SubmissionStatus.Approved}),
    "reject": (ActivityAction.BulkReject, {"status": SubmissionStatus.Rejected}),
    "verify_payment": (ActivityAction.BulkPaymentVerify, {"payment_verified": True}),
}


@dataclass
class ReviewOutcome:
    submission: Submission
    action_type: ActivityAction
    details: str
    status_changed: bool = False
    payment_newly_verified: bool = False
    notifications: List[dict] = field(default_factory=list)


def _status_label(status) -> str:
    return STATUS_LABELS.get(SubmissionStatus(status), str(status))


# ---------------------------------------------------------------------------
# CREATE
# ---------------------------------------------------------------------------
async def create_submission(
    session: AsyncSession,
    user: User,
    data: SubmissionCreate,
    payment_proof_url: str,
) -> Submission:
    submission = Submission(
        user_id=user.id,
        name=data.name,
        course=data.course,
        call_up=data.call_up,
        state_of_origin=data.state_of_origin,
        state_of_choices=data.state_of_choices,
        state_code=data.state_code,
        service_type=data.service_type,
        calculated_amount=calculate_fee(data.service_type, data.state_of_choices),
        nysc_email=str(data.nysc_email) if data.nysc_email else None,
        nysc_password=data.nysc_password,
        payment_proof_url=payment_proof_url,
    )

    session.add(submission)

    try:
        await session.commit()
        await session.refresh(submission)
        return submission

    except IntegrityError as e:
        await session.rollback()
        logger.error(f"IntegrityError while creating submission: {e}")
        raise ValueError("Failed to create submission. Integrity Error.")


# ---------------------------------------------------------------------------
# READ
# ---------------------------------------------------------------------------
async def get_submission(session: AsyncSession, submission_id: UUID) -> Submission | None:
    return await session.get(Submission, submission_id)


async def list_user_submissions(
    session: AsyncSession,
    user_id: UUID,
    search: Optional[str] = None,
) -> list[Submission]:
    query = (
        select(Submission)
        .where(Submission.user_id == user_id)
        .order_by(Submission.created_at.desc())
    )

    if search:
        pattern = f"%{search.lower()}%"
        query = query.where(
            or_(
                func.lower(Submission.name).like(pattern),
                func.lower(Submission.course).like(pattern),
                func.lower(Submission.call_up).like(pattern),
                func.lower(cast(Submission.service_type, String)).like(pattern),
                func.lower(cast(Submission.status, String)).like(pattern),
            )
        )

    result = await session.execute(query)
    return list(result.scalars().all())


async def list_all_submissions(
    session: AsyncSession,
    search: Optional[str] = None,
    status: Optional[SubmissionStatus] = None,
    payment_verified: Optional[bool] = None,
) -> list[Submission]:
    query = select(Submission).order_by(Submission.created_at.desc())

    if search:
        pattern = f"%{search.lower()}%"
        query = query.where(
            or_(
                func.lower(Submission.name).like(pattern),
                func.lower(Submission.call_up).like(pattern),
                func.lower(Submission.course).like(pattern),
                func.lower(func.coalesce(Submission.nysc_email, "")).like(pattern),
                func.lower(Submission.state_of_origin).like(pattern),
                func.lower(Submission.state_of_choices).like(pattern),
            )
        )
    if status is not None:
        query = query.where(Submission.status == status)
    if payment_verified is not None:
        query = query.where(Submission.payment_verified == payment_verified)

    result = await session.execute(query)
    return list(result.scalars().all())


# ---------------------------------------------------------------------------
# ADMIN REVIEW
# ---------------------------------------------------------------------------
def _apply_changes(session: AsyncSession, submission: Submission, changes: dict) -> tuple[bool, bool, List[dict]]:
    """
    Applies review fields to one submission and stages the owner's
    notifications. Returns (status_changed, payment_newly_verified, notices).
    """
    old_status = submission.status
    old_verified = submission.payment_verified
    notices: List[dict] = []

    for name, value in changes.items():
        setattr(submission, name, value)

    # The fee follows its inputs on every write
    submission.calculated_amount = calculate_fee(submission.service_type, submission.state_of_choices)
    submission.updated_at = utcnow()
    session.add(submission)

    status_changed = submission.status != old_status
    payment_newly_verified = bool(submission.payment_verified) and not old_verified
    service_name = display_name(submission.service_type)

    if status_changed:
        notices.append({
            "type": NotificationType.StatusChange,
            "title": "Submission status updated",
            "message": f"Your {service_name} submission is now {_status_label(submission.status)}.",
            "meta": {
                "submission_id": str(submission.id),
                "old_status": SubmissionStatus(old_status).value,
                "status": SubmissionStatus(submission.status).value,
            },
        })

    if payment_newly_verified:
        notices.append({
            "type": NotificationType.PaymentVerified,
            "title": "Payment verified",
            "message": (
                f"Your payment of {format_naira(submission.calculated_amount)} "
                f"for {service_name} has been verified."
            ),
            "meta": {"submission_id": str(submission.id)},
        })

    for notice in notices:
        add_notification(
            session,
            user_id=submission.user_id,
            notification_type=notice["type"],
            title=notice["title"],
            message=notice["message"],
            meta=notice["meta"],
        )

    return status_changed, payment_newly_verified, notices


async def review_submission(
    session: AsyncSession,
    submission_id: UUID,
    review: SubmissionReview,
) -> ReviewOutcome:
    submission = await session.get(Submission, submission_id)
    if not submission:
        raise LookupError("Submission not found")

    old_status = SubmissionStatus(submission.status)
    old_verified = submission.payment_verified
    changes = review.model_dump(exclude_unset=True)
    # status / payment flag cannot be cleared, only set
    for required in ("status", "payment_verified"):
        if required in changes and changes[required] is None:
            changes.pop(required)

    status_changed, newly_verified, notices = _apply_changes(session, submission, changes)

    if status_changed:
        action = ActivityAction.StatusChange
        details = (
            f"Changed status of {submission.name}'s submission "
            f"({old_status.value} → {SubmissionStatus(submission.status).value})"
        )
    elif submission.payment_verified != old_verified:
        action = ActivityAction.PaymentVerification
        state = "verified" if submission.payment_verified else "unverified"
        details = f"Marked payment for {submission.name}'s submission as {state}"
    else:
        action = ActivityAction.SubmissionUpdated
        details = f"Updated remarks/notes on {submission.name}'s submission"

    await session.commit()
    await session.refresh(submission)

    return ReviewOutcome(
        submission=submission,
        action_type=action,
        details=details,
        status_changed=status_changed,
        payment_newly_verified=newly_verified,
        notifications=notices,
    )


async def bulk_update_submissions(
    session: AsyncSession,
    ids: List[UUID],
    action: str,
) -> tuple[ActivityAction, List[Submission], List[UUID]]:
    if action not in BULK_ACTIONS:
        raise ValueError(f"Unknown bulk action '{action}'")

    activity, changes = BULK_ACTIONS[action]

    result = await session.execute(select(Submission).where(Submission.id.in_(ids)))
    found = {s.id: s for s in result.scalars().all()}
    missing = [i for i in ids if i not in found]

    updated = []
    for submission in found.values():
        _apply_changes(session, submission, dict(changes))
        updated.append(submission)

    await session.commit()
    return activity, updated, missing
