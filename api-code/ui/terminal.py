from __future__ import annotations

import sys
from typing import Optional, TextIO

from .controller import ChatTranscript, MessageHandle


SENDER_LABELS = {"user": "you", "bot": "bot"}


class TerminalDisplay(ChatTranscript):
    """Transcript that echoes every new or updated bubble to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__()
        self.stream = stream or sys.stdout

    def append_message(self, text: str, sender: str) -> MessageHandle:
        handle = super().append_message(text, sender)
        self._render(handle)
        return handle

    def update_message(self, handle: MessageHandle, text: str) -> None:
        super().update_message(handle, text)
        self._render(handle)

    def scroll_to_latest(self) -> None:
        self.stream.flush()

    def _render(self, handle: MessageHandle) -> None:
        bubble = self.get(handle)
        label = SENDER_LABELS.get(bubble.sender, bubble.sender)
        self.stream.write(f"[{label}] {bubble.text}\n")
