from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

import google.generativeai as genai

from errors import ChatServiceError
from schemas import ChatMessage

from .response_parser import extract_text


logger = logging.getLogger("gemini-relay.chat")

GEMINI_MODEL_NAME = "gemini-2.5-flash"


class GeminiChatService:
    """Relays chat turns to Gemini and unwraps the reply text."""

    def __init__(self, api_key: Optional[str], model_name: str = GEMINI_MODEL_NAME):
        self.api_key = api_key
        self.model_name = model_name

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def generate_reply(self, messages: Sequence[ChatMessage]) -> str:
        if not self.api_key:
            raise ChatServiceError("GOOGLE_API_KEY is not configured.")

        contents = build_contents(messages)
        logger.debug("Sending %d turn(s) to %s", len(contents), self.model_name)
        response = await asyncio.to_thread(self._call_gemini, contents)
        return extract_text(response)

    def _call_gemini(self, contents: List[Dict[str, Any]]) -> Any:
        genai.configure(api_key=self.api_key)
        model = genai.GenerativeModel(self.model_name)
        return model.generate_content(contents)


def build_contents(messages: Sequence[ChatMessage]) -> List[Dict[str, Any]]:
    """Map chat messages to Gemini content turns, preserving order."""
    return [{"role": message.role, "parts": [message.content]} for message in messages]
