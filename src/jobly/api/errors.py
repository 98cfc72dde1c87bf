"""
jobly.api.errors

Exception handlers: the single boundary where typed errors become HTTP responses.

Every error body has the shape {"error": {"status": <code>, "message": <message>}}.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_400_BAD_REQUEST

from jobly.errors import JoblyError
from jobly.observability.logging import get_logger

log = get_logger(__name__)


def error_response(status: int, message: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"error": {"status": status, "message": message}},
    )


def _validation_messages(exc: RequestValidationError) -> list[str]:
    messages = []
    for err in exc.errors():
        # Drop the "body"/"query"/"path" prefix from the location.
        loc = ".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0])
        messages.append(f"{loc}: {err['msg']}")
    return messages


def install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(JoblyError)
    async def _jobly_error_handler(_request: Request, exc: JoblyError) -> JSONResponse:
        log.info("request.rejected", status=exc.status_code, error=type(exc).__name__)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        log.info("request.invalid", errors=len(exc.errors()))
        return error_response(HTTP_400_BAD_REQUEST, _validation_messages(exc))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(exc.status_code, exc.detail)
