"""AI store assistant."""
from .client import AssistantReply, ChatAssistant, get_chat_assistant
from .prompts import GREETING, STORE_CONTEXT

__all__ = [
    "AssistantReply",
    "ChatAssistant",
    "get_chat_assistant",
    "GREETING",
    "STORE_CONTEXT",
]
