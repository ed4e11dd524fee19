from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from adroast.core.context import current_run_id
from adroast.exceptions.errors import AppError

logger = logging.getLogger("adroast")


def request_run_id(request: Request) -> str:
    # the Exception handler runs after RequestContextMiddleware has reset run_id_var
    return getattr(request.state, "run_id", None) or current_run_id()


def error_body(
    message: str, *, details: Any = None, meta: dict | None = None, run_id: str | None = None
) -> dict[str, Any]:
    body: dict[str, Any] = {"error": message}
    if details is not None:
        body["details"] = details
    if meta is not None:
        body["_meta"] = meta
    body["run_id"] = run_id or current_run_id()
    return body


def register_exception_handlers(app) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "APP_ERROR run_id=%s path=%s type=%s status=%s message=%s",
            current_run_id(),
            request.url.path,
            type(exc).__name__,
            exc.status_code,
            exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, details=exc.details, meta=exc.meta),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        run_id = current_run_id()
        logger.warning(
            "VALIDATION run_id=%s path=%s errors=%s",
            run_id,
            request.url.path,
            exc.errors(),
        )
        return JSONResponse(
            status_code=422,
            content=error_body("Invalid request", details=jsonable_errors(exc)),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        run_id = request_run_id(request)
        logger.exception("UNHANDLED run_id=%s path=%s", run_id, request.url.path)
        return JSONResponse(status_code=500, content=error_body("Internal server error", run_id=run_id))


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
