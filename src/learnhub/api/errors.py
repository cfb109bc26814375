"""
learnhub.api.errors

Exception handlers rendering the domain error taxonomy as JSON.

Responsibilities:
- Map `LearnHubError` subclasses to their status codes with a stable body shape.
- Render request validation failures as 422 in the same shape.
- Hide unexpected failures behind a generic 500 (details go to logs only).
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from learnhub.errors import AuthenticationError, LearnHubError
from learnhub.observability.logging import get_logger

log = get_logger(__name__)


def _body(code: str, message: str, detail: Any = None) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if detail is not None:
        error["detail"] = detail
    return {"error": error}


async def learnhub_error_handler(request: Request, exc: LearnHubError) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    if exc.status_code >= 500:
        log.error("request_failed", code=exc.code)
    return JSONResponse(
        status_code=exc.status_code,
        content=_body(exc.code, exc.message),
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    detail = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=_body("validation_error", "Request validation failed.", detail),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled_exception")
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content=_body("internal_error", "An unexpected error occurred."),
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LearnHubError, learnhub_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, validation_error_handler  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, unhandled_error_handler)


# --- Module Notes -----------------------------------------------------------
# Every 401 carries the same message whatever the cause (unknown user, wrong
# password, bad/expired/missing token).
