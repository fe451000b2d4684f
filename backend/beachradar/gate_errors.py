# beachradar/gate_errors.py
from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from beachradar.schemas import ErrorOut

logger = logging.getLogger(__name__)

MISSING_ENV = "missing_env"
MISSING_APP_SHELL = "missing_app_shell"
METHOD_NOT_ALLOWED = "method_not_allowed"


class AccessConfigError(Exception):
    """
    Server-side misconfiguration (secret unset, app build missing).
    Always a 500; the body only carries a short code, never config values.
    """

    def __init__(self, code: str = MISSING_ENV):
        super().__init__(code)
        self.code = code


def error_response(status_code: int, code: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorOut(error=code).model_dump(),
        headers=headers,
    )


def config_error_response(exc: AccessConfigError) -> JSONResponse:
    logger.error("Access gate misconfigured: %s", exc.code)
    return error_response(500, exc.code)


async def access_config_error_handler(request: Request, exc: AccessConfigError):
    return config_error_response(exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Everything else: normal JSON
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )
