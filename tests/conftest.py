import os
import random
import string
import pytest_asyncio
from unittest.mock import AsyncMock, patch
from httpx import AsyncClient, ASGITransport

# ------------------------------------------------------------------
# TEST CONFIGURATION
# Must be set BEFORE importing app.main so settings, the DB engine and
# the rate limiter pick them up.
# ------------------------------------------------------------------
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_portal.db"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SMTP_HOST"] = ""
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_KEY"] = ""
os.environ["AI_GATEWAY_API_KEY"] = ""

from sqlmodel import SQLModel

from app.main import app
from app.core.database import engine, AsyncSessionLocal
from app.models import user, submission, support_message, activity_log, notification  # noqa: F401
from app.models.enums import UserRole
from app.services.auth_service import create_user, create_login_response


def random_str(prefix=""):
    return f"{prefix}{''.join(random.choices(string.ascii_lowercase + string.digits, k=6))}"


@pytest_asyncio.fixture(autouse=True)
async def db():
    """Fresh schema for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest_asyncio.fixture
async def session():
    async with AsyncSessionLocal() as s:
        yield s


# ------------------------------------------------------------------
# ACCOUNT HELPERS
# ------------------------------------------------------------------
async def register(client, full_name="Test Corper", email=None, password="password123"):
    email = email or f"{random_str('corper')}@test.com"
    res = await client.post("/api/auth/register", json={
        "full_name": full_name,
        "email": email,
        "password": password,
        "confirm_password": password,
    })
    assert res.status_code == 201, res.text
    body = res.json()
    return {"Authorization": f"Bearer {body['access_token']}"}, body["user"]


async def make_admin(email=None, full_name="Portal Admin", password="adminpass123"):
    email = email or f"{random_str('admin')}@test.com"
    async with AsyncSessionLocal() as s:
        admin = await create_user(s, full_name=full_name, email=email, password=password, role=UserRole.Admin)
    token = create_login_response(admin).access_token
    return {"Authorization": f"Bearer {token}"}, admin


@pytest_asyncio.fixture
async def user_auth(client):
    return await register(client)


@pytest_asyncio.fixture
async def admin_auth():
    return await make_admin()


# ------------------------------------------------------------------
# SUBMISSION HELPERS
# ------------------------------------------------------------------
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def submission_form(**overrides):
    form = {
        "service_type": "link_one",
        "name": "Ada Okafor",
        "course": "Computer Science",
        "call_up": "NYSC/ABC/2025/123456",
        "state_of_origin": "Enugu",
        "state_of_choices": "Lagos, Ogun",
        "nysc_email": "",
        "nysc_password": "",
    }
    form.update(overrides)
    return form


async def submit(client, headers, proof="https://storage.example.com/payment-proofs/proof.png", **overrides):
    """Posts a submission with storage patched out; returns the response."""
    with patch("app.api.endpoints.submissions.upload_payment_proof", new=AsyncMock(return_value=proof)):
        return await client.post(
            "/api/submissions",
            data=submission_form(**overrides),
            files={"payment_proof": ("proof.png", PNG_BYTES, "image/png")},
            headers=headers,
        )
