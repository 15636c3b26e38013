"""Translate domain errors into HTTP responses.

Every error body has the shape ``{"error": <kind>, "messages": {...}}``.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from shop.shared.exceptions import DuplicateNameError
from shop.utils.logging import get_logger

logger = get_logger(__name__)

_REQUEST_PARTS = ("body", "query", "path", "header")


def _messages(exc) -> dict:
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        return messages
    return {"_entity": [str(messages or exc)]}


def _error(status_code: int, kind: str, messages: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": kind, "messages": messages})


async def duplicate_name_handler(request: Request, exc: Exception) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, "duplicate_name", _messages(exc))


async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, "not_found", _messages(exc))


async def domain_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, "validation", _messages(exc))


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    messages = {}
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"] if loc not in _REQUEST_PARTS)
        messages.setdefault(field or "_request", []).append(error["msg"])

    logger.warning("request_validation_failed", path=request.url.path, fields=sorted(messages))
    return _error(status.HTTP_400_BAD_REQUEST, "validation", messages)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", method=request.method, path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install Protean's handlers, then the shop's own on top of them."""
    register_exception_handlers(app)

    app.add_exception_handler(DuplicateNameError, duplicate_name_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(ValidationError, domain_validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
