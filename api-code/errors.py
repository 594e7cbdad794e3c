"""Error types and the JSON error rendering shared by the API."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger("gemini-relay")

INVALID_MESSAGES_ERROR = "Invalid messages format. Expected an array."
INTERNAL_ERROR = "Internal Server Error"


class ChatServiceError(RuntimeError):
    """Raised when the chat service cannot produce a reply."""


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def describe_validation_errors(errors: Sequence[dict[str, Any]]) -> str:
    """Turn pydantic validation errors into a single caller-facing message."""
    if not errors:
        return "Invalid request body."

    first = errors[0]
    loc = tuple(first.get("loc", ()))
    if loc == ("body", "messages"):
        if first.get("type") == "too_short":
            return "Invalid messages format. Expected at least one message."
        return INVALID_MESSAGES_ERROR
    if first.get("type") == "json_invalid":
        return "Request body must be valid JSON."
    if len(loc) <= 1:
        return INVALID_MESSAGES_ERROR

    field = ".".join(str(part) for part in loc[1:])
    return f"Invalid request body at '{field}': {first.get('msg', 'invalid value')}"


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = describe_validation_errors(exc.errors())
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return error_response(message, status.HTTP_400_BAD_REQUEST)


def register_error_handlers(app: FastAPI) -> None:
    """Attach JSON error handlers once during startup."""
    app.add_exception_handler(RequestValidationError, validation_error_handler)
