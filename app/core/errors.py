# app/core/errors.py
"""
Uniform error envelope for every route.

Every failure is rendered as:

    {"success": false, "error": "<message>", "details": "<optional>"}

Status mapping:
  - HTTPException            -> its own status (400 / 401 / 403 / 404 / 413)
  - RequestValidationError   -> 400 with field-level messages
  - SQLAlchemyError          -> 500, driver message passed through in details
  - anything else            -> 500
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


def error_body(message: str, details: str | None = None) -> dict:
    body: dict = {"success": False, "error": message}
    if details is not None:
        body["details"] = details
    return body


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        # loc looks like ("body", "latitude") or ("query", "user_id")
        field = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "form"))
        msg = err.get("msg", "invalid value")
        parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts) or "Invalid request"


def setup_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            content=error_body(str(exc.detail)),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            content=error_body(_format_validation_errors(exc)),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            content=error_body("Database error", str(exc.orig if getattr(exc, "orig", None) else exc)),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            content=error_body("Internal server error", str(exc)),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
