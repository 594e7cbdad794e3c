from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: str = Field(..., description="Sender role, e.g. 'user'.")
    content: str = Field(..., description="Plain text of the turn.")


class ChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(
        ..., min_length=1, description="Ordered chat turns, oldest first."
    )


class ChatResponse(BaseModel):
    result: str = Field(..., description="Text extracted from the model reply.")


class ChatErrorResponse(BaseModel):
    error: str = Field(..., description="Human-readable failure message.")
