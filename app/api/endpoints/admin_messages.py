# app/api/endpoints/admin_messages.py

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Literal, Optional
from uuid import UUID

from app.api.deps import get_db_session
from app.core.rbac import require_admin
from app.models.enums import ActivityAction, EntityType, MessageStatus
from app.models.user import User
from app.schemas.support import SupportMessageRead, SupportResponse
from app.services.activity_service import log_activity
from app.services.email_service import send_support_response_email
from app.services.export_service import MESSAGE_COLUMNS, export_file, message_rows
from app.services.notification_service import get_preferences
from app.services.support_service import list_all_messages, respond_to_message

router = APIRouter(prefix="/api/admin/messages", tags=["Admin Messages"])


@router.get("", response_model=List[SupportMessageRead])
async def admin_list_messages(
    search: Optional[str] = Query(None),
    status: Optional[MessageStatus] = Query(None),
    session: AsyncSession = Depends(get_db_session),
    _: User = Depends(require_admin),
):
    return await list_all_messages(session, search=search, status=status)


@router.get("/export", response_class=Response)
async def export_messages(
    format: Literal["csv", "xlsx"] = Query("csv"),
    search: Optional[str] = Query(None),
    status: Optional[MessageStatus] = Query(None),
    session: AsyncSession = Depends(get_db_session),
    _: User = Depends(require_admin),
):
    messages = await list_all_messages(session, search=search, status=status)
    content, media_type, filename = export_file(message_rows(messages), MESSAGE_COLUMNS, format, "support_messages")

    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/{message_id}/respond", response_model=SupportMessageRead)
async def admin_respond(
    message_id: UUID,
    payload: SupportResponse,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_db_session),
    admin: User = Depends(require_admin),
):
    try:
        message, details = await respond_to_message(session, message_id, payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))

    background_tasks.add_task(
        log_activity,
        action_type=ActivityAction.MessageResponse,
        entity_type=EntityType.Message,
        details=details,
        admin_id=admin.id,
        admin_email=admin.email,
        entity_id=message.id,
    )

    owner = await session.get(User, message.user_id)
    prefs = await get_preferences(session, message.user_id)

    if owner and prefs.email_admin_response:
        background_tasks.add_task(send_support_response_email, {
            "email": owner.email,
            "user_name": owner.full_name,
            "message_subject": message.subject,
            "user_message": message.message,
            "admin_response": message.admin_response,
            "subject": f"Response to: {message.subject}",
        })

    return message
