# app/services/activity_service.py

from uuid import UUID
from typing import Optional, Union
from loguru import logger
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity_log import ActivityLog
from app.models.enums import ActivityAction, EntityType
from app.core.database import AsyncSessionLocal


# Note: no 'session' argument. This function manages its own session
# so it is safe to hand to BackgroundTasks.
async def log_activity(
    action_type: Union[ActivityAction, str],
    entity_type: Union[EntityType, str],
    details: str,
    admin_id: Optional[UUID] = None,
    admin_email: Optional[str] = None,
    entity_id: Optional[Union[UUID, str]] = None,
):
    """
    Records an admin action in the activity log.
    Logging is silent: failures are reported to the server log only and never
    reach the admin who triggered the action.
    """
    async with AsyncSessionLocal() as session:
        try:
            entry = ActivityLog(
                admin_id=admin_id,
                admin_email=admin_email,
                action_type=getattr(action_type, "value", action_type),
                entity_type=getattr(entity_type, "value", entity_type),
                entity_id=str(entity_id) if entity_id else None,
                details=details,
            )

            session.add(entry)
            await session.commit()

        except Exception as e:
            logger.error(f"Activity log write failed ({action_type}): {e}")
            await session.rollback()


async def list_activity(session: AsyncSession, limit: int = 10) -> list[ActivityLog]:
    result = await session.execute(
        select(ActivityLog).order_by(ActivityLog.created_at.desc()).limit(limit)
    )
    return list(result.scalars().all())
