# app/services/notification_service.py

import json
from typing import Optional, Dict, Any
from uuid import UUID
from sqlmodel import select
from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import NotificationType, SubmissionStatus, MessageStatus
from app.models.notification import NotificationHistory, NotificationPreference
from app.models.submission import Submission
from app.models.support_message import SupportMessage
from app.models.user import utcnow
from app.schemas.notification import AlertCounts, NotificationPreferencesUpdate


# ============================================================================
# CHANGE-FEED WATCHER
# ============================================================================
class CountWatcher:
    """
    Turns a stream of row counts into "new item" alerts.

    The first observation only sets the baseline. After that, `observe`
    returns how many items appeared since the previous observation, and 0
    when the count stayed put or dropped. The baseline always follows the
    latest count, so a drop followed by a rise alerts only for the rise.
    """

    def __init__(self):
        self.previous: Optional[int] = None

    def observe(self, count: int) -> int:
        previous, self.previous = self.previous, count
        if previous is None or count <= previous:
            return 0
        return count - previous


async def count_pending_submissions(session: AsyncSession) -> int:
    result = await session.execute(
        select(func.count(Submission.id)).where(Submission.status == SubmissionStatus.Pending)
    )
    return result.scalar_one()


async def count_open_messages(session: AsyncSession) -> int:
    result = await session.execute(
        select(func.count(SupportMessage.id)).where(SupportMessage.status == MessageStatus.Open)
    )
    return result.scalar_one()


# ============================================================================
# USER ALERT COUNTS (badge in the navigation bar)
# ============================================================================
async def get_alert_counts(session: AsyncSession, user_id: UUID) -> AlertCounts:
    sub_rows = await session.execute(
        select(Submission.status, Submission.payment_verified).where(Submission.user_id == user_id)
    )
    submissions = sub_rows.all()

    msg_rows = await session.execute(
        select(SupportMessage.admin_response, SupportMessage.status).where(SupportMessage.user_id == user_id)
    )
    messages = msg_rows.all()

    pending = sum(1 for status, _ in submissions if status == SubmissionStatus.Pending)
    unverified = sum(1 for _, verified in submissions if not verified)
    unread = sum(
        1 for response, status in messages
        if response and status != MessageStatus.Closed
    )

    return AlertCounts(
        pending_submissions=pending,
        unverified_payments=unverified,
        unread_messages=unread,
        total_alerts=pending + unverified + unread,
    )


# ============================================================================
# HISTORY
# ============================================================================
def add_notification(
    session: AsyncSession,
    user_id: UUID,
    notification_type: NotificationType,
    title: str,
    message: str,
    meta: Optional[Dict[str, Any]] = None,
) -> NotificationHistory:
    """Stages a history entry; the caller's commit persists it."""
    entry = NotificationHistory(
        user_id=user_id,
        notification_type=notification_type.value,
        title=title,
        message=message,
        meta=meta or {},
    )
    session.add(entry)
    return entry


async def list_notifications(session: AsyncSession, user_id: UUID) -> list[NotificationHistory]:
    result = await session.execute(
        select(NotificationHistory)
        .where(NotificationHistory.user_id == user_id)
        .order_by(NotificationHistory.created_at.desc())
    )
    return list(result.scalars().all())


async def mark_as_read(session: AsyncSession, user_id: UUID, notification_id: UUID) -> NotificationHistory:
    entry = await session.get(NotificationHistory, notification_id)
    if not entry or entry.user_id != user_id:
        raise LookupError("Notification not found")

    entry.is_read = True
    session.add(entry)
    await session.commit()
    await session.refresh(entry)
    return entry


async def mark_all_as_read(session: AsyncSession, user_id: UUID) -> int:
    result = await session.execute(
        update(NotificationHistory)
        .where(NotificationHistory.user_id == user_id, NotificationHistory.is_read == False)  # noqa: E712
        .values(is_read=True)
    )
    await session.commit()
    return result.rowcount or 0


# ============================================================================
# PREFERENCES
# ============================================================================
async def get_preferences(session: AsyncSession, user_id: UUID) -> NotificationPreference:
    # Unsaved defaults (everything on) until the user stores their own
    prefs = await session.get(NotificationPreference, user_id)
    return prefs or NotificationPreference(user_id=user_id)


async def update_preferences(
    session: AsyncSession,
    user_id: UUID,
    payload: NotificationPreferencesUpdate,
) -> NotificationPreference:
    prefs = await session.get(NotificationPreference, user_id)
    if not prefs:
        prefs = NotificationPreference(user_id=user_id)

    for field, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(prefs, field, value)

    prefs.updated_at = utcnow()
    session.add(prefs)
    await session.commit()
    await session.refresh(prefs)
    return prefs


# ============================================================================
# ADMIN LIVE FEED (Server-Sent Events)
# ============================================================================
def format_sse(event: str, payload: Dict[str, Any]) -> str:
    return f"event: {event}\ndata: {json.dumps(payload)}\n\n"


def new_item_events(submission_delta: int, message_delta: int, sound: bool = True) -> list[tuple[str, Dict[str, Any]]]:
    """Events for the admin feed; an empty list when nothing new arrived."""
    events = []

    if submission_delta > 0:
        events.append(("new_submission", {
            "count": submission_delta,
            "title": "New Submission",
            "body": f"{submission_delta} new submission(s) received",
            "sound": sound,
        }))

    if message_delta > 0:
        events.append(("new_message", {
            "count": message_delta,
            "title": "New Support Message",
            "body": f"{message_delta} new message(s) received",
            "sound": sound,
        }))

    return events
