# app/services/support_service.py

from typing import Optional
from uuid import UUID
from sqlmodel import select
from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import MessageStatus, NotificationType
from app.models.support_message import SupportMessage
from app.models.user import utcnow
from app.schemas.support import SupportMessageCreate, SupportResponse
from app.services.notification_service import add_notification


async def create_message(session: AsyncSession, user_id: UUID, data: SupportMessageCreate) -> SupportMessage:
    message = SupportMessage(
        user_id=user_id,
        subject=data.subject,
        message=data.message,
    )
    session.add(message)
    await session.commit()
    await session.refresh(message)
    return message


async def list_user_messages(session: AsyncSession, user_id: UUID) -> list[SupportMessage]:
    result = await session.execute(
        select(SupportMessage)
        .where(SupportMessage.user_id == user_id)
        .order_by(SupportMessage.created_at.desc())
    )
    return list(result.scalars().all())


async def list_all_messages(
    session: AsyncSession,
    search: Optional[str] = None,
    status: Optional[MessageStatus] = None,
) -> list[SupportMessage]:
    query = select(SupportMessage).order_by(SupportMessage.created_at.desc())

    if search:
        pattern = f"%{search.lower()}%"
        query = query.where(
            or_(
                func.lower(SupportMessage.subject).like(pattern),
                func.lower(SupportMessage.message).like(pattern),
                func.lower(func.coalesce(SupportMessage.admin_response, "")).like(pattern),
            )
        )
    if status is not None:
        query = query.where(SupportMessage.status == status)

    result = await session.execute(query)
    return list(result.scalars().all())


async def respond_to_message(
    session: AsyncSession,
    message_id: UUID,
    payload: SupportResponse,
) -> tuple[SupportMessage, str]:
    """
    Stores the admin response and new status, and notifies the author.
    Returns the message and the activity-log line describing the change.
    """
    message = await session.get(SupportMessage, message_id)
    if not message:
        raise LookupError("Message not found")

    old_status = MessageStatus(message.status).value

    message.admin_response = payload.admin_response
    message.status = payload.status
    message.updated_at = utcnow()
    session.add(message)

    add_notification(
        session,
        user_id=message.user_id,
        notification_type=NotificationType.AdminResponse,
        title="Support replied to your message",
        message=f'An admin responded to "{message.subject}".',
        meta={"message_id": str(message.id), "status": payload.status.value},
    )

    await session.commit()
    await session.refresh(message)

    details = (
        f'Responded to message: "{message.subject}" '
        f"(status: {old_status} → {payload.status.value})"
    )
    return message, details
