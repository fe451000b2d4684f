# beachradar/access_guard.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request
from fastapi.responses import FileResponse, RedirectResponse
from starlette.datastructures import QueryParams
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from beachradar.access_policy import ACCESS_KEY_PARAM, AccessDecision, GateAction, resolve
from beachradar.config import AccessConfig, ConfigProvider, env_config
from beachradar.gate_errors import (
    METHOD_NOT_ALLOWED,
    MISSING_APP_SHELL,
    AccessConfigError,
    config_error_response,
    error_response,
)
from beachradar.gate_paths import APP_ACCESS_PATH, PathClass, classify
from beachradar.session_cookie import ACCESS_COOKIE, has_valid_session, issue_session

logger = logging.getLogger(__name__)


def first_query_value(params: QueryParams, name: str) -> Optional[str]:
    """
    ?key=a&key=b -> "a" (first one wins).
    """
    values = params.getlist(name)
    return values[0] if values else None


def relative_url(request: Request) -> str:
    """
    Path + raw query of the request, without scheme/host (never echo the Host header).
    """
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def redirect(location: str) -> RedirectResponse:
    return RedirectResponse(url=location, status_code=302)


def serve_app_entry(config: AccessConfig, resource: str) -> FileResponse:
    entry = config.app_shell_dir / resource.lstrip("/")
    if not entry.is_file():
        raise AccessConfigError(MISSING_APP_SHELL)
    return FileResponse(str(entry), media_type="text/html")


def build_response(action: GateAction, config: AccessConfig) -> Response:
    """
    Turns a non pass-through GateAction into the Starlette response.
    """
    if action.decision == AccessDecision.SERVE_PROTECTED:
        return serve_app_entry(config, action.resource or "")

    response = redirect(action.location or "")
    if action.set_cookie:
        issue_session(response)
    return response


class AccessGateMiddleware(BaseHTTPMiddleware):
    """
    Runs on every request.

    Behavior:
      - non-GET on the invite endpoint -> 405 + Allow: GET (any verb, one place)
      - classify the path
      - APP_PROTECTED without a session and without a configured secret -> 500
      - otherwise apply the decision table (access_policy.resolve)

    Exceptions raised here never reach the app's exception handlers,
    so config errors are turned into responses inline.
    """

    def __init__(self, app, config_provider: Optional[ConfigProvider] = None):
        super().__init__(app)
        self.config_provider = config_provider or env_config

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path

        if path == APP_ACCESS_PATH and request.method != "GET":
            return error_response(405, METHOD_NOT_ALLOWED, headers={"Allow": "GET"})

        path_class = classify(path)

        # Nothing else to look at for public paths
        if path_class in (PathClass.STATIC, PathClass.API, PathClass.WAITLIST, PathClass.PRIVACY):
            return await call_next(request)

        config = self.config_provider()
        cookie_value = request.cookies.get(ACCESS_COOKIE)
        query_key = first_query_value(request.query_params, ACCESS_KEY_PARAM)

        try:
            if (
                path_class == PathClass.APP_PROTECTED
                and not has_valid_session(cookie_value)
                and not config.has_access_key
            ):
                raise AccessConfigError()

            action = resolve(path_class, relative_url(request), cookie_value, query_key, config.access_key)
            if action.decision == AccessDecision.PASS_THROUGH:
                return await call_next(request)

            if action.decision == AccessDecision.REDIRECT_CLEAN_AND_GRANT:
                logger.info("Access granted via key on %s", path)
            else:
                logger.debug("Gate %s -> %s", path, action.decision.value)

            return build_response(action, config)
        except AccessConfigError as e:
            return config_error_response(e)
