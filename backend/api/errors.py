"""
Exception handlers. Every error response is ``{"message": str}``.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from domain.errors import BookExchangeError

logger = logging.getLogger(__name__)

_LOCATION_KINDS = {"body", "query", "path", "header", "cookie"}


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    fields = [part for part in first.get("loc", ()) if isinstance(part, str) and part not in _LOCATION_KINDS]
    msg = first.get("msg", "invalid value")
    if fields:
        return f"Invalid value for field '{'.'.join(fields)}': {msg}."
    return f"Invalid request: {msg}."


async def book_exchange_error_handler(request: Request, exc: BookExchangeError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": _validation_message(exc)})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error."})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookExchangeError, book_exchange_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
