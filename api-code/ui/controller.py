"""Chat submission flow shared by the terminal client and tests.

A display hands out an opaque handle for every bubble it appends; the
controller keeps the handle of the "Thinking..." placeholder and later asks
the display to update that same bubble with the relay's answer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Sequence

import httpx

from schemas import ChatMessage


logger = logging.getLogger("gemini-relay.ui")

THINKING_TEXT = "Thinking..."
NO_RESPONSE_TEXT = "Sorry, no response was received from the server."
FAILURE_TEXT = "Failed to get a response from the server. Please try again."

CHAT_PATH = "/api/chat"


@dataclass(frozen=True)
class MessageHandle:
    """Opaque reference to a bubble created by a display."""

    id: int


@dataclass
class Bubble:
    sender: str
    text: str


class ChatDisplay(Protocol):
    def append_message(self, text: str, sender: str) -> MessageHandle: ...

    def update_message(self, handle: MessageHandle, text: str) -> None: ...

    def scroll_to_latest(self) -> None: ...

    def clear_input(self) -> None: ...


@dataclass
class ChatTranscript:
    """Append-only, oldest-first list of bubbles kept in memory."""

    bubbles: List[Bubble] = field(default_factory=list)

    def append_message(self, text: str, sender: str) -> MessageHandle:
        self.bubbles.append(Bubble(sender=sender, text=text))
        return MessageHandle(len(self.bubbles) - 1)

    def update_message(self, handle: MessageHandle, text: str) -> None:
        self.bubbles[handle.id].text = text

    def get(self, handle: MessageHandle) -> Bubble:
        return self.bubbles[handle.id]

    def scroll_to_latest(self) -> None:
        return None

    def clear_input(self) -> None:
        return None


class RelayError(RuntimeError):
    """Raised when the relay could not be reached or answered with an error status."""


class RelayClient:
    """Posts chat turns to the relay's /api/chat endpoint."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.base_url}{CHAT_PATH}"

    async def send(self, messages: Sequence[ChatMessage]) -> Any:
        payload = {"messages": [message.model_dump() for message in messages]}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.url, json=payload)
        except httpx.HTTPError as exc:
            raise RelayError(f"Request to {self.url} failed: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            raise RelayError(f"HTTP error! Status: {response.status_code}")

        try:
            return response.json()
        except ValueError as exc:
            raise RelayError("Relay returned a non-JSON body.") from exc


class Relay(Protocol):
    async def send(self, messages: Sequence[ChatMessage]) -> Any: ...


class ChatController:
    def __init__(self, display: ChatDisplay, relay: Relay) -> None:
        self.display = display
        self.relay = relay

    def add_message(self, text: str, sender: str) -> MessageHandle:
        handle = self.display.append_message(text, sender)
        self.display.scroll_to_latest()
        return handle

    async def submit(self, raw_text: str) -> Optional[MessageHandle]:
        """Run one submission; returns the bot bubble handle, or None if ignored."""
        text = raw_text.strip()
        if not text:
            return None

        self.add_message(text, "user")
        placeholder = self.add_message(THINKING_TEXT, "bot")
        self.display.clear_input()

        try:
            data = await self.relay.send([ChatMessage(role="user", content=text)])
        except RelayError as exc:
            logger.error("Failed to fetch chat response: %s", exc)
            self.display.update_message(placeholder, FAILURE_TEXT)
            return placeholder

        self.display.update_message(placeholder, _result_text(data) or NO_RESPONSE_TEXT)
        return placeholder


def _result_text(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    result = data.get("result")
    if not result:
        return None
    return result if isinstance(result, str) else str(result)
