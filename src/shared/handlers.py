"""Error responses for everything Protean's exception handlers do not cover.

``protean.integrations.fastapi.register_exception_handlers`` maps the domain
exceptions (``ValidationError`` to 400, ``ObjectNotFoundError`` to 404, ...).
The handlers here add access errors, request schema mismatches, database
integrity violations and a catch-all 500, all shaped
``{"error": <message>, "details": <optional>}``.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from sqlalchemy.exc import IntegrityError

from shared.exceptions import AccessError
from shared.logging import get_logger

logger = get_logger(__name__)


def error_response(status_code: int, message: str, details=None) -> JSONResponse:
    content = {"error": message}
    if details is not None:
        content["details"] = jsonable_encoder(details)
    return JSONResponse(status_code=status_code, content=content)


async def access_error_handler(request: Request, exc: AccessError) -> JSONResponse:
    logger.info("request_rejected", path=request.url.path, status=exc.status_code, error=exc.message)
    return error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request_invalid", path=request.url.path, errors=len(exc.errors()))
    return error_response(400, "Invalid request data", exc.errors())


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("integrity_error", path=request.url.path, error=str(exc.orig))
    return error_response(400, "Request conflicts with existing data")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, method=request.method)
    return error_response(500, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    """Install Protean's domain exception handlers, then the application's own."""
    register_exception_handlers(app)
    app.add_exception_handler(AccessError, access_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
