# app/services/chat_service.py

from typing import AsyncIterator
import httpx
from loguru import logger

from app.core.config import settings
from app.services.pricing_service import pricing_prompt_block

OUT_OF_SCOPE_REPLY = (
    "I don't have that information in the portal. Please contact support for assistance."
)

ADMIN_FEATURES = """PORTAL FEATURES:
- Submission management and tracking
- User management and roles
- Payment verification
- Admin notes and remarks
- Activity logs
- Support message handling

You can help with:
- Understanding submission statistics and trends
- Answering questions about admin features
- Information about the services and pricing listed above"""

GENERAL_FEATURES = """PORTAL FEATURES:
- Submit NYSC direct posting requests
- Track submission status
- Upload payment proof
- View notification history
- Update notification preferences
- Access help center with FAQs

You can help with:
- Questions about the services and pricing listed above
- Explaining the submission process on this portal
- Guiding through portal features
- Payment verification steps"""


class ChatGatewayError(Exception):
    """Upstream AI gateway refused or failed the request."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


def build_system_prompt(chat_type: str) -> str:
    audience = "administrators" if chat_type == "admin" else "users"
    tone = "clear, actionable, and professional" if chat_type == "admin" else "friendly, clear, and helpful"
    features = ADMIN_FEATURES if chat_type == "admin" else GENERAL_FEATURES

    return (
        f"You are an AI assistant for the NYSC Management Portal {audience}.\n\n"
        "CRITICAL INSTRUCTIONS:\n"
        "- ONLY provide information that is available in this portal and the data provided below\n"
        "- DO NOT provide general NYSC information or universal knowledge\n"
        f"- If asked about something not in the portal data, respond: \"{OUT_OF_SCOPE_REPLY}\"\n"
        f"- Keep responses {tone}\n\n"
        "PORTAL DATA YOU CAN USE:\n"
        f"{pricing_prompt_block()}\n"
        f"{features}"
    )


def build_payload(messages: list[dict], chat_type: str) -> dict:
    return {
        "model": settings.AI_MODEL,
        "messages": [{"role": "system", "content": build_system_prompt(chat_type)}, *messages],
        "stream": True,
    }


async def open_chat_stream(messages: list[dict], chat_type: str) -> AsyncIterator[bytes]:
    """
    Opens a streaming completion against the gateway and returns an async
    iterator over the raw SSE bytes. Gateway errors are raised before the
    first chunk so the caller can still answer with a proper status code.
    """
    if not settings.AI_GATEWAY_API_KEY:
        raise ChatGatewayError(500, "AI gateway API key is not configured")

    client = httpx.AsyncClient(timeout=httpx.Timeout(60.0, connect=10.0))
    request = client.build_request(
        "POST",
        settings.AI_GATEWAY_URL,
        headers={
            "Authorization": f"Bearer {settings.AI_GATEWAY_API_KEY}",
            "Content-Type": "application/json",
        },
        json=build_payload(messages, chat_type),
    )

    try:
        response = await client.send(request, stream=True)
    except httpx.HTTPError as e:
        await client.aclose()
        logger.error(f"AI gateway unreachable: {e}")
        raise ChatGatewayError(500, "AI service error")

    if response.status_code != 200:
        body = await response.aread()
        await response.aclose()
        await client.aclose()

        if response.status_code == 429:
            raise ChatGatewayError(429, "Rate limit exceeded. Please try again later.")
        if response.status_code == 402:
            raise ChatGatewayError(402, "AI credits depleted. Please contact support.")

        logger.error(f"AI gateway error: {response.status_code} {body[:500]!r}")
        raise ChatGatewayError(500, "AI service error")

    async def relay() -> AsyncIterator[bytes]:
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        finally:
            await response.aclose()
            await client.aclose()

    return relay()
