"""
Storefront AI Chat Router

Proxies shopper questions to the chat-completion API so the API key never
reaches the browser.
"""
from fastapi import APIRouter, Depends, HTTPException

from safeer.assistant import GREETING, ChatAssistant
from safeer.cart import whatsapp_contact_url
from safeer.errors import ERROR_INVALID_REQUEST

from .deps import get_assistant
from .models import ChatMessageRequest, ChatMessageResponse

router = APIRouter(prefix="/ai", tags=["ai"])


@router.get("/greeting")
async def get_greeting():
    return {"reply_text": GREETING}


@router.post("/chat", response_model=ChatMessageResponse)
async def send_chat_message(
    request: ChatMessageRequest,
    assistant: ChatAssistant = Depends(get_assistant),
):
    """Answer one shopper message. Failures come back as apology text, not errors."""
    message = request.message.strip()
    if not message:
        raise HTTPException(status_code=422, detail=ERROR_INVALID_REQUEST)

    reply = await assistant.reply(message)
    return ChatMessageResponse(
        reply_text=reply.text,
        ok=reply.ok,
        whatsapp_url=whatsapp_contact_url(assistant.whatsapp_number),
    )
