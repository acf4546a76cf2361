# app/api/endpoints/submissions.py

from fastapi import (
    APIRouter, BackgroundTasks, Depends, File, Form, HTTPException,
    Query, Request, UploadFile, status,
)
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from uuid import UUID
from loguru import logger

from app.api.deps import get_db_session, get_current_user, is_admin
from app.core.rate_limiter import limiter, SUBMISSION_RATE
from app.core.storage import upload_payment_proof
from app.models.user import User
from app.schemas.submission import SubmissionCreate, SubmissionRead
from app.services.email_service import send_submission_received_email
from app.services.notification_service import get_preferences
from app.services.pricing_service import display_name, format_naira
from app.services.submission_service import (
    create_submission,
    get_submission,
    list_user_submissions,
)

router = APIRouter(
    prefix="/api/submissions",
    tags=["Submissions"]
)


# ------------------------------------------------------------
# CREATE SUBMISSION (form fields + payment proof)
# ------------------------------------------------------------
@router.post("", response_model=SubmissionRead, status_code=status.HTTP_201_CREATED)
@limiter.limit(SUBMISSION_RATE)
async def submit_posting_request(
    request: Request,
    background_tasks: BackgroundTasks,
    service_type: str = Form(...),
    name: str = Form(...),
    course: str = Form(...),
    call_up: str = Form(...),
    state_of_origin: str = Form(...),
    state_of_choices: str = Form(...),
    state_code: Optional[str] = Form(None),
    nysc_email: Optional[str] = Form(None),
    nysc_password: Optional[str] = Form(None),
    payment_proof: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    # Validate the form before anything reaches storage
    try:
        data = SubmissionCreate(
            service_type=service_type,
            name=name,
            course=course,
            call_up=call_up,
            state_of_origin=state_of_origin,
            state_of_choices=state_of_choices,
            state_code=state_code,
            nysc_email=nysc_email,
            nysc_password=nysc_password,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))

    proof_url = await upload_payment_proof(payment_proof, current_user.id)

    try:
        submission = await create_submission(session, current_user, data, proof_url)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Creating submission failed for {current_user.email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred while creating the submission."
        )

    prefs = await get_preferences(session, current_user.id)
    if prefs.email_submission_updates:
        background_tasks.add_task(send_submission_received_email, {
            "name": submission.name,
            "email": current_user.email,
            "submission_id": submission.id,
            "service_name": display_name(submission.service_type),
            "amount": format_naira(submission.calculated_amount),
        })

    return submission


# ------------------------------------------------------------
# MY SUBMISSIONS
# ------------------------------------------------------------
@router.get("/my", response_model=List[SubmissionRead])
async def my_submissions(
    search: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await list_user_submissions(session, current_user.id, search=search)


# ------------------------------------------------------------
# SINGLE SUBMISSION (owner or admin)
# ------------------------------------------------------------
@router.get("/{submission_id}", response_model=SubmissionRead)
async def read_submission(
    submission_id: UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    submission = await get_submission(session, submission_id)

    # Someone else's submission looks the same as a missing one
    if not submission or (submission.user_id != current_user.id and not is_admin(current_user)):
        raise HTTPException(status_code=404, detail="Submission not found")

    return submission
