from .chat import ChatErrorResponse, ChatMessage, ChatRequest, ChatResponse

__all__ = [
    "ChatErrorResponse",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
]
