# app/main.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
import sys
import time

from app.core.database import test_connection, init_db, AsyncSessionLocal
from app.core.config import settings
from app.core.rate_limiter import limiter
from app.services.auth_service import get_user_by_email, create_user
from app.models.user import UserRole

# Routers
from app.api.endpoints import (
    auth as auth_router,
    account as account_router,
    users as users_router,
    pricing as pricing_router,
    submissions as submissions_router,
    admin_submissions as admin_submissions_router,
    support as support_router,
    admin_messages as admin_messages_router,
    dashboard as dashboard_router,
    notifications as notifications_router,
    activity as activity_router,
    chat as chat_router,
)

# ------------------------------------------------------------
# LOGURU CONFIGURATION
# ------------------------------------------------------------
logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
           "<level>{level}</level> | "
           "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
           "<level>{message}</level>",
    colorize=True,
    backtrace=True,
    diagnose=settings.ENV != "prod",
)

# ------------------------------------------------------------
# FASTAPI APP INIT
# ------------------------------------------------------------
app = FastAPI(
    title="NYSC Posting Portal Backend",
    version="1.0.0",
    description="Backend service for the NYSC direct posting portal.",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

START_TIME = time.time()


# ------------------------------------------------------------
# HEALTH / METRICS
# ------------------------------------------------------------
@app.get("/api/metrics", tags=["System"])
async def metrics():
    db_start = time.time()

    try:
        await test_connection()
        database = "Connected"
        db_latency = round((time.time() - db_start) * 1000, 2)
    except Exception as e:
        logger.error(f"Health check DB ping failed: {e}")
        database = "Error"
        db_latency = 0

    return {
        "status": "Online",
        "version": app.version,
        "uptime": int(time.time() - START_TIME),
        "database": database,
        "db_latency": db_latency,
    }


# ------------------------------------------------------------
# CORS CONFIGURATION
# ------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        settings.FRONTEND_URL,
    ],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "*"],
)

# ------------------------------------------------------------
# REGISTER ROUTERS
# ------------------------------------------------------------
app.include_router(auth_router.router)
app.include_router(account_router.router)
app.include_router(users_router.router)
app.include_router(pricing_router.router)
app.include_router(submissions_router.router)
app.include_router(admin_submissions_router.router)
app.include_router(support_router.router)
app.include_router(admin_messages_router.router)
app.include_router(dashboard_router.router)
app.include_router(notifications_router.router)
app.include_router(notifications_router.admin_router)
app.include_router(activity_router.router)
app.include_router(chat_router.router)


# ------------------------------------------------------------
# APPLICATION STARTUP EVENTS
# ------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    logger.info("Starting NYSC Posting Portal Backend...")

    # 1) Database connection test
    try:
        await test_connection()
        db_ready = True
        logger.success("Database connection established.")
    except Exception:
        db_ready = False
        logger.exception("Startup aborted: Database connection failed.")

    if not db_ready:
        return

    # 2) Initialize database tables
    try:
        await init_db()
        logger.success("Database tables ready.")
    except Exception as e:
        logger.warning(f"Table initialization encountered an issue: {e}")

    # 3) Seed Super Admin
    try:
        async with AsyncSessionLocal() as session:
            if not settings.SUPER_ADMIN_EMAIL or not settings.SUPER_ADMIN_PASSWORD:
                logger.warning("Missing Super Admin credentials in settings.")
            elif await get_user_by_email(session, settings.SUPER_ADMIN_EMAIL):
                logger.info("Super Admin already exists. Skipping.")
            else:
                logger.info(f"Seeding Super Admin: {settings.SUPER_ADMIN_EMAIL}")
                await create_user(
                    session=session,
                    full_name=settings.SUPER_ADMIN_NAME or "Portal Admin",
                    email=settings.SUPER_ADMIN_EMAIL,
                    password=settings.SUPER_ADMIN_PASSWORD,
                    role=UserRole.Admin,
                )
                logger.success("Super Admin created successfully.")
    except Exception:
        logger.exception("Super Admin seeding failed.")

    logger.success("Backend startup completed successfully.")


# ------------------------------------------------------------
# ROOT HEALTH CHECK
# ------------------------------------------------------------
@app.get("/", tags=["System"])
async def root():
    return {
        "status": "ok",
        "service": "NYSC Posting Portal Backend",
        "version": app.version,
        "message": "Backend running successfully",
    }
