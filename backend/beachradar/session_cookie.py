# beachradar/session_cookie.py
from __future__ import annotations

from typing import Optional

from starlette.responses import Response

from beachradar.gate_paths import APP_PATH_PREFIX

ACCESS_COOKIE = "br_app_access"
ACCESS_COOKIE_VALUE = "1"
ACCESS_COOKIE_MAX_AGE = 60 * 60 * 24 * 30  # 30 days


def build_cookie(value: str = ACCESS_COOKIE_VALUE) -> str:
    """
    Exact Set-Cookie header value.

    Built by hand (not Response.set_cookie) so the attribute order and
    casing never change between the two places that grant access.
    """
    return "; ".join(
        [
            f"{ACCESS_COOKIE}={value}",
            f"Max-Age={ACCESS_COOKIE_MAX_AGE}",
            f"Path={APP_PATH_PREFIX}",
            "HttpOnly",
            "SameSite=Lax",
            "Secure",
        ]
    )


def has_valid_session(cookie_value: Optional[str]) -> bool:
    return cookie_value == ACCESS_COOKIE_VALUE


def issue_session(response: Response) -> Response:
    """
    The ONLY way a session gets granted. Used by:
      - the gate middleware (clean-and-grant redirect)
      - GET /api/app-access (invite links)
    """
    response.headers.append("set-cookie", build_cookie())
    return response
