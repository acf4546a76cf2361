# app/core/storage.py

import time
import uuid
from pathlib import Path
from loguru import logger
from supabase import create_client, Client
from fastapi import UploadFile, HTTPException

from app.core.config import settings

# Init Client (graceful failure: uploads report 500 until configured)
try:
    supabase: Client | None = (
        create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
        if settings.SUPABASE_URL and settings.SUPABASE_KEY
        else None
    )
except Exception as e:
    logger.warning(f"Supabase init failed: {e}")
    supabase = None

BUCKET_NAME = settings.PAYMENT_PROOF_BUCKET
MAX_FILE_SIZE = settings.MAX_PROOF_SIZE_MB * 1024 * 1024


def is_allowed_proof_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    return content_type.startswith("image/") or content_type == "application/pdf"


def proof_extension(file: UploadFile) -> str:
    suffix = Path(file.filename or "").suffix.lstrip(".").lower()
    if suffix:
        return suffix
    # image/png -> png, application/pdf -> pdf
    return (file.content_type or "bin").split("/")[-1].lower()


async def upload_payment_proof(file: UploadFile, user_id: uuid.UUID) -> str:
    """
    Uploads a payment proof (screenshot or receipt) to Supabase Storage.
    - Accepts images and PDFs up to MAX_FILE_SIZE.
    - Stores under {user_id}/{timestamp_ms}.{ext}.
    - Returns the public URL of the stored object.
    """
    if not is_allowed_proof_type(file.content_type):
        raise HTTPException(400, "Payment proof must be an image or a PDF.")

    file_content = await file.read()

    if not file_content:
        raise HTTPException(400, "Payment proof file is empty.")

    if len(file_content) > MAX_FILE_SIZE:
        raise HTTPException(400, f"File size must be less than {settings.MAX_PROOF_SIZE_MB}MB.")

    await file.seek(0)

    if not supabase:
        logger.error("Supabase credentials missing; cannot store payment proof.")
        raise HTTPException(500, "Storage service unavailable.")

    file_path = f"{user_id}/{int(time.time() * 1000)}.{proof_extension(file)}"

    try:
        supabase.storage.from_(BUCKET_NAME).upload(
            path=file_path,
            file=file_content,
            file_options={"content-type": file.content_type, "upsert": "false"}
        )
        return supabase.storage.from_(BUCKET_NAME).get_public_url(file_path)

    except Exception as e:
        logger.error(f"Storage upload error for {file_path}: {e}")
        raise HTTPException(500, "Failed to upload payment proof to cloud storage.")
