# app/api/endpoints/support.py

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.api.deps import get_db_session, get_current_user
from app.core.rate_limiter import limiter, SUPPORT_RATE
from app.models.enums import ActivityAction, EntityType
from app.models.user import User
from app.schemas.support import SupportMessageCreate, SupportMessageRead
from app.services.activity_service import log_activity
from app.services.support_service import create_message, list_user_messages

router = APIRouter(prefix="/api/support", tags=["Support"])


@router.post("/messages", response_model=SupportMessageRead, status_code=status.HTTP_201_CREATED)
@limiter.limit(SUPPORT_RATE)
async def send_message(
    request: Request,
    payload: SupportMessageCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    message = await create_message(session, current_user.id, payload)

    background_tasks.add_task(
        log_activity,
        action_type=ActivityAction.UserMessageSent,
        entity_type=EntityType.Message,
        details=f'{current_user.full_name} sent a support message: "{message.subject}"',
        admin_id=current_user.id,
        admin_email=current_user.email,
        entity_id=message.id,
    )

    return message


@router.get("/messages", response_model=List[SupportMessageRead])
async def my_messages(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await list_user_messages(session, current_user.id)
