from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles


PROJECT_ROOT = Path(__file__).resolve().parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
if str(API_CODE_PATH) not in sys.path:
    sys.path.insert(0, str(API_CODE_PATH))

from env_loader import load_local_env  # noqa: E402
from errors import register_error_handlers  # noqa: E402
from routers import build_chat_router, build_health_router  # noqa: E402
from services import GeminiChatService  # noqa: E402
from settings import Settings, get_settings  # noqa: E402


logger = logging.getLogger("gemini-relay")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the relay application from an explicit settings value."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Gemini Chat Relay",
        version="0.1.0",
        description="Relays browser chat messages to Google Gemini.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    chat_service = GeminiChatService(api_key=settings.google_api_key)
    if not chat_service.configured:
        logger.warning("GOOGLE_API_KEY missing; /api/chat will answer with errors.")

    app.include_router(build_chat_router(chat_service))
    app.include_router(build_health_router(chat_service))

    # Mounted last so API routes take precedence over files.
    app.mount(
        "/",
        StaticFiles(directory=str(settings.public_dir), html=True, check_dir=False),
        name="public",
    )
    return app


load_local_env(PROJECT_ROOT / ".env")
settings = get_settings()

logging.basicConfig(level=settings.log_level.upper())

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    logger.info("Server is running on http://localhost:%s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
