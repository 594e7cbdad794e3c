from .chat_service import GEMINI_MODEL_NAME, GeminiChatService, build_contents
from .response_parser import extract_text

__all__ = ["GEMINI_MODEL_NAME", "GeminiChatService", "build_contents", "extract_text"]
