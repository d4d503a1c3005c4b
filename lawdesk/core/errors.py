"""
Application errors.

Every failure a caller can trigger is a ``LawDeskError`` carrying a message and
the HTTP status it maps to. Stores raise them, services let them propagate and
the API renders them as ``{"message": ...}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class LawDeskError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RecordNotFound(LawDeskError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, label: str, record_id: str):
        super().__init__(f"{label} not found")
        self.record_id = record_id


class DuplicateRecord(LawDeskError):
    status_code = status.HTTP_409_CONFLICT


class ReferenceConflict(LawDeskError):
    status_code = status.HTTP_409_CONFLICT


class InvalidReference(LawDeskError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class InvalidRecord(LawDeskError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class InvalidFilter(LawDeskError):
    status_code = status.HTTP_400_BAD_REQUEST


class LedgerError(LawDeskError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(LawDeskError):
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDenied(LawDeskError):
    status_code = status.HTTP_403_FORBIDDEN


def _message_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


async def lawdesk_error_handler(request: Request, exc: LawDeskError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return _message_response(exc.status_code, exc.message, headers)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _message_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"
    return _message_response(status.HTTP_422_UNPROCESSABLE_ENTITY, message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LawDeskError, lawdesk_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
