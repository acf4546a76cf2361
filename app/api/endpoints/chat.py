# app/api/endpoints/chat.py

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from app.api.deps import get_current_user, is_admin
from app.models.user import User
from app.schemas.chat import ChatRequest
from app.services.chat_service import ChatGatewayError, open_chat_stream

router = APIRouter(prefix="/api/chat", tags=["AI Chat"])


@router.post("")
async def chat(
    payload: ChatRequest,
    current_user: User = Depends(get_current_user),
):
    if payload.type == "admin" and not is_admin(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")

    try:
        stream = await open_chat_stream(
            [m.model_dump() for m in payload.messages],
            payload.type,
        )
    except ChatGatewayError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)

    return StreamingResponse(
        stream,
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
