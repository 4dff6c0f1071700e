"""
Store assistant backed by an OpenAI-compatible chat-completion API (Groq).

The API key lives only on the server; the browser talks to /api/ai/chat.
"""
from dataclasses import dataclass
from typing import Optional

import httpx

from safeer.config import (
    GROQ_API_KEY,
    GROQ_API_URL,
    GROQ_MODEL,
    GROQ_TIMEOUT_SECONDS,
    WHATSAPP_NUMBER,
)
from safeer.errors import ERROR_ASSISTANT_UNAVAILABLE, ERROR_ASSISTANT_UNCLEAR
from safeer.logging import get_logger, sanitize_string_for_logging

from .prompts import STORE_CONTEXT

logger = get_logger(__name__)

TEMPERATURE = 0.7
MAX_TOKENS = 1024


@dataclass(frozen=True)
class AssistantReply:
    text: str
    ok: bool


class ChatAssistant:
    """Single-turn Q&A about the store. Never raises to the caller."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: str = GROQ_API_URL,
        model: str = GROQ_MODEL,
        system_prompt: str = STORE_CONTEXT,
        whatsapp_number: str = WHATSAPP_NUMBER,
        timeout: float = GROQ_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = GROQ_API_KEY if api_key is None else api_key
        self.api_url = api_url
        self.model = model
        self.system_prompt = system_prompt
        self.whatsapp_number = whatsapp_number
        self.timeout = timeout
        self.transport = transport

    def _fallback(self) -> AssistantReply:
        return AssistantReply(
            text=ERROR_ASSISTANT_UNAVAILABLE.format(phone=self.whatsapp_number), ok=False
        )

    def build_payload(self, message: str) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": message},
            ],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
        }

    async def reply(self, message: str) -> AssistantReply:
        """Ask the model; fall back to an apology that points to WhatsApp."""
        if not self.api_key:
            logger.error("GROQ_API_KEY is not set; assistant unavailable")
            return self._fallback()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.api_url,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json=self.build_payload(message),
                )
            if response.is_error:
                logger.error(
                    f"Chat completion error {response.status_code}: "
                    f"{sanitize_string_for_logging(response.text, max_length=200)}"
                )
                return self._fallback()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Chat completion request failed: {e}")
            return self._fallback()

        text = _first_choice_text(data)
        if not text:
            return AssistantReply(text=ERROR_ASSISTANT_UNCLEAR, ok=True)
        return AssistantReply(text=text, ok=True)


def _first_choice_text(data) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content.strip() if isinstance(content, str) else ""


_assistant: Optional[ChatAssistant] = None


def get_chat_assistant() -> ChatAssistant:
    """Get or create the ChatAssistant singleton."""
    global _assistant
    if _assistant is None:
        _assistant = ChatAssistant()
    return _assistant
