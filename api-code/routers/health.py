from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from services import GeminiChatService


def build_health_router(chat_service: GeminiChatService) -> APIRouter:
    router = APIRouter()

    @router.get("/healthz")
    async def healthcheck() -> Dict[str, Any]:
        configured = chat_service.configured
        return {
            "status": "healthy" if configured else "degraded",
            "model": chat_service.model_name,
            "api_key_configured": configured,
        }

    return router
