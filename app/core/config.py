from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str

    # If DEV and you hit SSL cert issues with the Supabase pooler, set DB_SSL_VERIFY=false in .env
    DB_SSL_VERIFY: bool = True

    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    SUPER_ADMIN_EMAIL: str | None = None
    SUPER_ADMIN_PASSWORD: str | None = None
    SUPER_ADMIN_NAME: str | None = "Portal Admin"
    ENV: str = "dev"  # "dev" or "prod"

    # --- EMAIL SETTINGS ---
    SMTP_HOST: str | None = None
    SMTP_PORT: int = 2525  # Default to Mailtrap port
    SMTP_USER: str | None = None
    SMTP_PASSWORD: str | None = None
    EMAILS_FROM_EMAIL: str = "support@nyscportal.ng"
    EMAILS_FROM_NAME: str = "NYSC Support"
    FRONTEND_URL: str = "http://localhost:5173"

    # --- STORAGE ---
    SUPABASE_URL: str | None = None
    SUPABASE_KEY: str | None = None
    PAYMENT_PROOF_BUCKET: str = "payment-proofs"
    MAX_PROOF_SIZE_MB: int = 20

    # --- PAYMENT ACCOUNT (shown alongside a quote) ---
    PAYMENT_BANK_NAME: str = "Opay"
    PAYMENT_ACCOUNT_NUMBER: str = "6111931518"
    PAYMENT_ACCOUNT_NAME: str = "Olusegun Raphael"

    # --- AI CHAT GATEWAY (OpenAI-compatible) ---
    AI_GATEWAY_URL: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    AI_GATEWAY_API_KEY: str | None = None
    AI_MODEL: str = "google/gemini-2.5-flash"

    # --- RATE LIMITING / REALTIME ---
    REDIS_URL: str | None = None
    RATE_LIMIT_ENABLED: bool = True
    NOTIFICATION_POLL_SECONDS: float = 5.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
