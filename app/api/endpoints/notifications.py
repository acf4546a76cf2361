# app/api/endpoints/notifications.py

import asyncio
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from uuid import UUID
from loguru import logger

from app.api.deps import get_db_session, get_current_user
from app.core.config import settings
from app.core.database import AsyncSessionLocal
from app.core.rbac import require_admin
from app.models.user import User
from app.schemas.notification import (
    AlertCounts,
    NotificationRead,
    NotificationPreferences,
    NotificationPreferencesUpdate,
)
from app.services.notification_service import (
    CountWatcher,
    count_pending_submissions,
    count_open_messages,
    format_sse,
    get_alert_counts,
    get_preferences,
    list_notifications,
    mark_all_as_read,
    mark_as_read,
    new_item_events,
    update_preferences,
)

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])
admin_router = APIRouter(prefix="/api/admin/notifications", tags=["Notifications"])


# -------------------------------------------------------------------
# ALERT BADGE
# -------------------------------------------------------------------
@router.get("/alerts", response_model=AlertCounts)
async def alerts(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await get_alert_counts(session, current_user.id)


# -------------------------------------------------------------------
# PREFERENCES
# -------------------------------------------------------------------
@router.get("/preferences", response_model=NotificationPreferences)
async def read_preferences(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await get_preferences(session, current_user.id)


@router.put("/preferences", response_model=NotificationPreferences)
async def save_preferences(
    payload: NotificationPreferencesUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await update_preferences(session, current_user.id, payload)


# -------------------------------------------------------------------
# HISTORY
# -------------------------------------------------------------------
@router.get("", response_model=List[NotificationRead])
async def history(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await list_notifications(session, current_user.id)


@router.post("/read-all")
async def read_all(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    updated = await mark_all_as_read(session, current_user.id)
    return {"updated": updated}


@router.patch("/{notification_id}/read", response_model=NotificationRead)
async def read_one(
    notification_id: UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    try:
        return await mark_as_read(session, current_user.id, notification_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


# -------------------------------------------------------------------
# ADMIN LIVE FEED
# -------------------------------------------------------------------
@admin_router.get("/stream")
async def admin_stream(
    request: Request,
    admin: User = Depends(require_admin),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Polls pending submissions and open support messages and pushes
    `new_submission` / `new_message` events whenever either count grows.
    """
    prefs = await get_preferences(session, admin.id)
    sound = prefs.sound_enabled

    async def event_generator():
        submissions_watch = CountWatcher()
        messages_watch = CountWatcher()

        yield ": connected\n\n"

        while not await request.is_disconnected():
            try:
                async with AsyncSessionLocal() as poll_session:
                    pending = await count_pending_submissions(poll_session)
                    open_messages = await count_open_messages(poll_session)
            except Exception as e:
                logger.error(f"Notification feed poll failed: {e}")
            else:
                for event, payload in new_item_events(
                    submissions_watch.observe(pending),
                    messages_watch.observe(open_messages),
                    sound,
                ):
                    yield format_sse(event, payload)

            await asyncio.sleep(settings.NOTIFICATION_POLL_SECONDS)

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no"
        }
    )
