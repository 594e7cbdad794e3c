from __future__ import annotations

import logging
from typing import Union

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from errors import INTERNAL_ERROR, error_response
from schemas import ChatErrorResponse, ChatRequest, ChatResponse
from services import GeminiChatService


logger = logging.getLogger("gemini-relay.chat")


def build_chat_router(chat_service: GeminiChatService) -> APIRouter:
    """Create the chat router wired to the provided chat service."""
    router = APIRouter(prefix="/api", tags=["chat"])

    @router.post(
        "/chat",
        response_model=ChatResponse,
        responses={
            status.HTTP_400_BAD_REQUEST: {"model": ChatErrorResponse},
            status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ChatErrorResponse},
        },
        summary="Relay chat turns to Gemini and return the reply text.",
    )
    async def chat_endpoint(payload: ChatRequest) -> Union[ChatResponse, JSONResponse]:
        try:
            reply = await chat_service.generate_reply(payload.messages)
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Error in /api/chat")
            return error_response(
                str(exc) or INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return ChatResponse(result=reply)

    return router
