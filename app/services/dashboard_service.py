# app/services/dashboard_service.py

from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Optional
from uuid import UUID
from sqlmodel import select
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import SubmissionStatus, MessageStatus
from app.models.submission import Submission
from app.models.support_message import SupportMessage
from app.models.user import User
from app.schemas.activity import ActivityLogRead
from app.schemas.dashboard import AdminDashboardStats, UserDashboardStats, TrendPoint
from app.services.activity_service import list_activity

TREND_DAYS = 7


def _percent(part: int, whole: int) -> int:
    return round(part / whole * 100) if whole > 0 else 0


def _as_utc_date(value: datetime) -> date:
    # SQLite hands back naive datetimes; they were written as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).date()


def submission_trend(created: list[datetime], today: Optional[date] = None) -> list[TrendPoint]:
    """Zero-filled daily submission counts for the last TREND_DAYS days, oldest first."""
    today = today or datetime.now(timezone.utc).date()
    per_day = Counter(_as_utc_date(c) for c in created)

    points = []
    for offset in range(TREND_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        points.append(TrendPoint(
            date=day.isoformat(),
            label=day.strftime("%b ") + str(day.day),
            submissions=per_day.get(day, 0),
        ))
    return points


# ============================================================================
# ADMIN DASHBOARD
# ============================================================================
async def get_admin_stats(session: AsyncSession, activity_limit: int = 10) -> AdminDashboardStats:
    status_rows = await session.execute(
        select(Submission.status, func.count(Submission.id)).group_by(Submission.status)
    )
    status_counts = {SubmissionStatus(row[0]): row[1] for row in status_rows.all()}
    total_submissions = sum(status_counts.values())

    verified_res = await session.execute(
        select(func.count(Submission.id)).where(Submission.payment_verified == True)  # noqa: E712
    )
    verified_payments = verified_res.scalar_one()

    msg_rows = await session.execute(
        select(SupportMessage.status, func.count(SupportMessage.id)).group_by(SupportMessage.status)
    )
    msg_counts = {MessageStatus(row[0]): row[1] for row in msg_rows.all()}
    total_messages = sum(msg_counts.values())
    closed_messages = msg_counts.get(MessageStatus.Closed, 0)

    users_res = await session.execute(select(func.count(User.id)))
    total_users = users_res.scalar_one()

    return AdminDashboardStats(
        total_submissions=total_submissions,
        verified_payments=verified_payments,
        pending_submissions=status_counts.get(SubmissionStatus.Pending, 0),
        total_messages=total_messages,
        open_messages=msg_counts.get(MessageStatus.Open, 0),
        closed_messages=closed_messages,
        total_users=total_users,
        verification_rate=_percent(verified_payments, total_submissions),
        response_rate=_percent(closed_messages, total_messages),
        avg_submissions_per_user=round(total_submissions / total_users, 1) if total_users else 0,
        recent_activity=[
            ActivityLogRead.model_validate(entry)
            for entry in await list_activity(session, limit=activity_limit)
        ],
    )


# ============================================================================
# USER DASHBOARD
# ============================================================================
async def get_user_stats(session: AsyncSession, user_id: UUID) -> UserDashboardStats:
    sub_rows = await session.execute(
        select(Submission.status, Submission.payment_verified, Submission.created_at)
        .where(Submission.user_id == user_id)
    )
    submissions = sub_rows.all()

    msg_rows = await session.execute(
        select(SupportMessage.status).where(SupportMessage.user_id == user_id)
    )
    message_statuses = [MessageStatus(row[0]) for row in msg_rows.all()]

    by_status = Counter(SubmissionStatus(row[0]) for row in submissions)

    return UserDashboardStats(
        total_submissions=len(submissions),
        pending_submissions=by_status.get(SubmissionStatus.Pending, 0),
        approved_submissions=by_status.get(SubmissionStatus.Approved, 0),
        rejected_submissions=by_status.get(SubmissionStatus.Rejected, 0),
        verified_payments=sum(1 for row in submissions if row[1]),
        total_messages=len(message_statuses),
        open_messages=sum(1 for s in message_statuses if s == MessageStatus.Open),
        status_breakdown={status.value: count for status, count in by_status.items() if count > 0},
        submission_trend=submission_trend([row[2] for row in submissions]),
    )
