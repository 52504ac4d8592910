"""Error taxonomy for the player API and its HTTP translation.

Domain code raises the exceptions below; nothing outside this module formats
an error response. `register_exception_handlers` wires the translation onto
the FastAPI app once:

- `PlayerNotFoundError` -> 404 with the structured error body
- `PatchError` subclasses -> 400 with the structured error body
- `InvalidPlayerError` -> 400 with a fixed plain-text message
- `SQLAlchemyError` (store failure) -> 500 with the structured error body

Structured error body: `{timestamp, statusCode, path, message}`.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

INVALID_PLAYER_MESSAGE = (
    "All player attributes (name, nationality, birthDate, titles) must be provided and valid"
)


class PlayerAPIError(Exception):
    """Base class for errors that map onto a client-facing status code."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PlayerNotFoundError(PlayerAPIError):
    status_code = 404

    def __init__(self, player_id: int):
        super().__init__(f"Player with id {player_id} not found.")
        self.player_id = player_id


class InvalidPlayerError(PlayerAPIError):
    """Full-update payload is incomplete or invalid."""

    def __init__(self):
        super().__init__(INVALID_PLAYER_MESSAGE)


class PatchError(PlayerAPIError):
    """A partial-update payload could not be applied."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class UnknownFieldError(PatchError):
    def __init__(self, field: str):
        super().__init__(field, f"Unknown field '{field}'")


class FieldValidationError(PatchError):
    def __init__(self, field: str, reason: str):
        super().__init__(field, f"Invalid value for field '{field}': {reason}")
        self.reason = reason


def error_body(request: Request, status_code: int, message: str) -> dict:
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "statusCode": status_code,
        "path": request.url.path,
        "message": message,
    }


async def player_api_error_handler(request: Request, exc: PlayerAPIError):
    if isinstance(exc, InvalidPlayerError):
        return PlainTextResponse(exc.message, status_code=exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, exc.status_code, exc.message),
    )


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Store failure on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=error_body(request, 500, "Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PlayerAPIError, player_api_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
