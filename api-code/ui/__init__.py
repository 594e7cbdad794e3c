from .controller import (
    FAILURE_TEXT,
    NO_RESPONSE_TEXT,
    THINKING_TEXT,
    ChatController,
    ChatDisplay,
    ChatTranscript,
    MessageHandle,
    RelayClient,
    RelayError,
)
from .terminal import TerminalDisplay

__all__ = [
    "FAILURE_TEXT",
    "NO_RESPONSE_TEXT",
    "THINKING_TEXT",
    "ChatController",
    "ChatDisplay",
    "ChatTranscript",
    "MessageHandle",
    "RelayClient",
    "RelayError",
    "TerminalDisplay",
]
