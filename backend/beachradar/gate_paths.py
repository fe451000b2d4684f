# beachradar/gate_paths.py
from __future__ import annotations

"""
Central place to define which paths the access gate knows about.

Every request path falls into exactly one PathClass:
- STATIC / API: always passed through (assets, JSON endpoints)
- ROOT: the bare "/" which only ever funnels into the waitlist
- WAITLIST / PRIVACY: public pages, passed through
- APP_PROTECTED: "/app" and everything below it, needs the access cookie
- OTHER: anything else (default-deny)
"""

from enum import Enum

ROOT_PATH = "/"
WAITLIST_PATH = "/waitlist/"
WAITLIST_PATH_PREFIX = "/waitlist"
PRIVACY_PATH_PREFIX = "/privacy"
API_PATH_PREFIX = "/api"
APP_ACCESS_PATH = API_PATH_PREFIX + "/app-access"
APP_PATH_PREFIX = "/app"
APP_ROOT_PATH = APP_PATH_PREFIX + "/"

# Resource served in place of any protected path once the cookie is valid.
APP_ENTRY_RESOURCE = "/index.html"

# Keep these small and obvious.
STATIC_PATH_PREFIXES: tuple[str, ...] = (
    "/_next",
    "/_vercel",
    "/assets",
    "/icons",
    "/og",
)

STATIC_FILES: frozenset[str] = frozenset(
    {
        "/favicon.ico",
        "/favicon-16x16.png",
        "/favicon-32x32.png",
        "/apple-touch-icon.png",
        "/manifest.webmanifest",
        "/robots.txt",
        "/sitemap.xml",
        "/vite.svg",
    }
)


class PathClass(str, Enum):
    STATIC = "static"
    API = "api"
    ROOT = "root"
    WAITLIST = "waitlist"
    PRIVACY = "privacy"
    APP_PROTECTED = "app_protected"
    OTHER = "other"


def is_static_asset(path: str) -> bool:
    if path in STATIC_FILES:
        return True
    return path.startswith(STATIC_PATH_PREFIXES)


def is_app_path(path: str) -> bool:
    return path == APP_PATH_PREFIX or path.startswith(APP_ROOT_PATH)


def classify(path: str) -> PathClass:
    # Order matters: first match wins.
    if is_static_asset(path):
        return PathClass.STATIC
    if path.startswith(API_PATH_PREFIX):
        return PathClass.API
    if path == ROOT_PATH:
        return PathClass.ROOT
    if path.startswith(WAITLIST_PATH_PREFIX):
        return PathClass.WAITLIST
    if path.startswith(PRIVACY_PATH_PREFIX):
        return PathClass.PRIVACY
    if is_app_path(path):
        return PathClass.APP_PROTECTED
    return PathClass.OTHER


def sanitize_app_path(path: str | None) -> str:
    """
    Post-redemption target coming from the query string.
    Only paths inside the app prefix are honored; anything else lands on /app/.
    """
    trimmed = (path or "").strip()
    if not trimmed:
        return APP_ROOT_PATH
    normalized = trimmed if trimmed.startswith("/") else f"/{trimmed}"
    if is_app_path(normalized):
        return normalized
    return APP_ROOT_PATH
