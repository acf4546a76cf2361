import io
import re
import uuid
import pytest
from unittest.mock import MagicMock
from fastapi import HTTPException, UploadFile
from starlette.datastructures import Headers

from app.core import storage


def make_upload(content: bytes, filename: str, content_type: str) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def test_allowed_types():
    assert storage.is_allowed_proof_type("image/png")
    assert storage.is_allowed_proof_type("image/jpeg")
    assert storage.is_allowed_proof_type("application/pdf")
    assert not storage.is_allowed_proof_type("text/plain")
    assert not storage.is_allowed_proof_type(None)


def test_extension_falls_back_to_content_type():
    assert storage.proof_extension(make_upload(b"x", "receipt.PDF", "application/pdf")) == "pdf"
    assert storage.proof_extension(make_upload(b"x", "", "image/jpeg")) == "jpeg"


@pytest.mark.asyncio
@pytest.mark.parametrize("content, content_type", [
    (b"hello", "text/plain"),
    (b"", "image/png"),
])
async def test_rejects_bad_files(content, content_type):
    with pytest.raises(HTTPException) as exc:
        await storage.upload_payment_proof(make_upload(content, "proof.bin", content_type), uuid.uuid4())
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_rejects_oversized_file(monkeypatch):
    monkeypatch.setattr(storage, "MAX_FILE_SIZE", 10)
    with pytest.raises(HTTPException) as exc:
        await storage.upload_payment_proof(make_upload(b"x" * 11, "proof.png", "image/png"), uuid.uuid4())
    assert exc.value.status_code == 400
    assert "less than" in exc.value.detail


@pytest.mark.asyncio
async def test_uploads_under_user_folder(monkeypatch):
    client = MagicMock()
    bucket = client.storage.from_.return_value
    bucket.get_public_url.return_value = "https://cdn.example.com/proof.png"
    monkeypatch.setattr(storage, "supabase", client)

    user_id = uuid.uuid4()
    url = await storage.upload_payment_proof(make_upload(b"\x89PNG", "proof.png", "image/png"), user_id)

    assert url == "https://cdn.example.com/proof.png"
    client.storage.from_.assert_called_with("payment-proofs")
    path = bucket.upload.call_args.kwargs["path"]
    assert re.fullmatch(rf"{user_id}/\d{{13}}\.png", path)


@pytest.mark.asyncio
async def test_upload_error_is_500(monkeypatch):
    client = MagicMock()
    client.storage.from_.return_value.upload.side_effect = RuntimeError("bucket missing")
    monkeypatch.setattr(storage, "supabase", client)

    with pytest.raises(HTTPException) as exc:
        await storage.upload_payment_proof(make_upload(b"%PDF", "proof.pdf", "application/pdf"), uuid.uuid4())
    assert exc.value.status_code == 500
