# beachradar/routers/app_access.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from beachradar.access_guard import first_query_value, redirect
from beachradar.access_policy import ACCESS_KEY_PARAM, key_matches
from beachradar.config import AccessConfig
from beachradar.gate_errors import AccessConfigError
from beachradar.gate_paths import APP_ACCESS_PATH, WAITLIST_PATH, sanitize_app_path
from beachradar.session_cookie import issue_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["access"])

NEXT_PATH_PARAM = "path"


def current_config(request: Request) -> AccessConfig:
    return request.app.state.config_provider()


@router.get(APP_ACCESS_PATH, include_in_schema=False)
def redeem_app_access(request: Request):
    """
    Invite links land here: /api/app-access?key=...&path=/app/...

    Non-GET methods never get here (AccessGateMiddleware answers 405).

    - secret not set    -> 500 missing_env
    - bad/missing key   -> 302 /waitlist/
    - good key          -> cookie + 302 to the (sanitized) app path
    """
    config = current_config(request)
    if not config.has_access_key:
        raise AccessConfigError()

    provided_key = first_query_value(request.query_params, ACCESS_KEY_PARAM)
    if not key_matches(provided_key, config.access_key):
        logger.debug("Invite redemption refused")
        return redirect(WAITLIST_PATH)

    next_path = sanitize_app_path(first_query_value(request.query_params, NEXT_PATH_PARAM))
    logger.info("Invite redeemed, redirecting to %s", next_path)
    return issue_session(redirect(next_path))
