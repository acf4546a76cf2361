# app/api/endpoints/admin_submissions.py

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Literal, Optional
from uuid import UUID

from app.api.deps import get_db_session
from app.core.rbac import require_admin
from app.models.enums import EntityType, NotificationType, SubmissionStatus
from app.models.user import User
from app.schemas.submission import (
    SubmissionAdminRead,
    SubmissionReview,
    BulkSubmissionAction,
    BulkActionResult,
)
from app.services.activity_service import log_activity
from app.services.email_service import send_submission_update_email
from app.services.export_service import SUBMISSION_COLUMNS, export_file, submission_rows
from app.services.notification_service import get_preferences
from app.services.submission_service import (
    list_all_submissions,
    review_submission,
    bulk_update_submissions,
)

router = APIRouter(prefix="/api/admin/submissions", tags=["Admin Submissions"])

# notification type -> preference that gates its email
EMAIL_PREFERENCE = {
    NotificationType.StatusChange: "email_submission_updates",
    NotificationType.PaymentVerified: "email_payment_verified",
}


# -------------------------------------------------------------------
# LIST / SEARCH
# -------------------------------------------------------------------
@router.get("", response_model=List[SubmissionAdminRead])
async def admin_list_submissions(
    search: Optional[str] = Query(None),
    status: Optional[SubmissionStatus] = Query(None),
    payment_verified: Optional[bool] = Query(None),
    session: AsyncSession = Depends(get_db_session),
    _: User = Depends(require_admin),
):
    return await list_all_submissions(
        session, search=search, status=status, payment_verified=payment_verified
    )


# -------------------------------------------------------------------
# EXPORT (csv / xlsx)
# -------------------------------------------------------------------
@router.get("/export", response_class=Response)
async def export_submissions(
    format: Literal["csv", "xlsx"] = Query("csv"),
    search: Optional[str] = Query(None),
    status: Optional[SubmissionStatus] = Query(None),
    payment_verified: Optional[bool] = Query(None),
    session: AsyncSession = Depends(get_db_session),
    _: User = Depends(require_admin),
):
    submissions = await list_all_submissions(
        session, search=search, status=status, payment_verified=payment_verified
    )
    content, media_type, filename = export_file(submission_rows(submissions), SUBMISSION_COLUMNS, format, "submissions")

    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# -------------------------------------------------------------------
# BULK ACTIONS
# -------------------------------------------------------------------
@router.post("/bulk", response_model=BulkActionResult)
async def admin_bulk_action(
    payload: BulkSubmissionAction,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_db_session),
    admin: User = Depends(require_admin),
):
    activity, updated, missing = await bulk_update_submissions(session, payload.ids, payload.action)

    if updated:
        background_tasks.add_task(
            log_activity,
            action_type=activity,
            entity_type=EntityType.BulkAction,
            details=f"{activity.value.replace('_', ' ').capitalize()} on {len(updated)} submission(s)",
            admin_id=admin.id,
            admin_email=admin.email,
        )

    return BulkActionResult(
        action=payload.action,
        updated=[s.id for s in updated],
        missing=missing,
    )


# -------------------------------------------------------------------
# REVIEW ONE SUBMISSION
# -------------------------------------------------------------------
@router.patch("/{submission_id}", response_model=SubmissionAdminRead)
async def admin_review_submission(
    submission_id: UUID,
    payload: SubmissionReview,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_db_session),
    admin: User = Depends(require_admin),
):
    try:
        outcome = await review_submission(session, submission_id, payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))

    submission = outcome.submission

    background_tasks.add_task(
        log_activity,
        action_type=outcome.action_type,
        entity_type=EntityType.Submission,
        details=outcome.details,
        admin_id=admin.id,
        admin_email=admin.email,
        entity_id=submission.id,
    )

    if outcome.notifications:
        owner = await session.get(User, submission.user_id)
        prefs = await get_preferences(session, submission.user_id)

        for notice in outcome.notifications:
            if owner and getattr(prefs, EMAIL_PREFERENCE[notice["type"]]):
                background_tasks.add_task(send_submission_update_email, {
                    "name": submission.name,
                    "email": owner.email,
                    "title": notice["title"],
                    "message": notice["message"],
                    "remarks": submission.remarks,
                })

    return submission
