# beachradar/access_policy.py
from __future__ import annotations

"""
Decision table for the access gate.

Pure functions only: no request objects, no env reads. The middleware and
the tests feed it plain values and get back what to do.

    STATIC, API          -> pass through
    ROOT                 -> waitlist (even with a valid session)
    WAITLIST, PRIVACY    -> pass through
    APP_PROTECTED        -> serve if cookie ok
                            else clean-and-grant if ?key= matches
                            else waitlist
    OTHER                -> waitlist (default-deny)
"""

import secrets
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import unquote_plus

from beachradar.gate_paths import APP_ENTRY_RESOURCE, WAITLIST_PATH, PathClass
from beachradar.session_cookie import has_valid_session

ACCESS_KEY_PARAM = "key"

_PASS_THROUGH_CLASSES = frozenset(
    {PathClass.STATIC, PathClass.API, PathClass.WAITLIST, PathClass.PRIVACY}
)


class AccessDecision(str, Enum):
    PASS_THROUGH = "pass_through"
    REDIRECT_WAITLIST = "redirect_waitlist"
    REDIRECT_CLEAN_AND_GRANT = "redirect_clean_and_grant"
    SERVE_PROTECTED = "serve_protected"


@dataclass(frozen=True)
class GateAction:
    decision: AccessDecision
    location: Optional[str] = None
    set_cookie: bool = False
    resource: Optional[str] = None


def key_matches(query_key: Optional[str], secret: Optional[str]) -> bool:
    """
    An unset/empty secret never matches anything, so a misconfigured
    deploy closes the gate instead of opening it.
    """
    if not secret or not query_key:
        return False
    return secrets.compare_digest(query_key.encode("utf-8"), secret.encode("utf-8"))


def decide(
    path_class: PathClass,
    cookie_value: Optional[str],
    query_key: Optional[str],
    secret: Optional[str],
) -> AccessDecision:
    if path_class in _PASS_THROUGH_CLASSES:
        return AccessDecision.PASS_THROUGH

    if path_class == PathClass.APP_PROTECTED:
        if has_valid_session(cookie_value):
            return AccessDecision.SERVE_PROTECTED
        # A bare key never serves content: it has to be swapped for the cookie first.
        if key_matches(query_key, secret):
            return AccessDecision.REDIRECT_CLEAN_AND_GRANT
        return AccessDecision.REDIRECT_WAITLIST

    # ROOT and OTHER
    return AccessDecision.REDIRECT_WAITLIST


def _param_name(pair: str) -> str:
    return unquote_plus(pair.split("=", 1)[0])


def strip_key_param(url: str) -> str:
    """
    Drops every key=... pair and keeps the rest of the query text as sent
    (no re-encoding: "?flag&q=a%20b" stays "?flag&q=a%20b").
    """
    url, hash_sign, fragment = url.partition("#")
    base, _, query = url.partition("?")
    kept = [pair for pair in query.split("&") if pair and _param_name(pair) != ACCESS_KEY_PARAM]
    if kept:
        base = base + "?" + "&".join(kept)
    return f"{base}{hash_sign}{fragment}"


def resolve(
    path_class: PathClass,
    url: str,
    cookie_value: Optional[str],
    query_key: Optional[str],
    secret: Optional[str],
) -> GateAction:
    """
    decide() plus the concrete targets the middleware needs.
    """
    decision = decide(path_class, cookie_value, query_key, secret)

    if decision == AccessDecision.REDIRECT_CLEAN_AND_GRANT:
        return GateAction(decision, location=strip_key_param(url), set_cookie=True)
    if decision == AccessDecision.REDIRECT_WAITLIST:
        return GateAction(decision, location=WAITLIST_PATH)
    if decision == AccessDecision.SERVE_PROTECTED:
        return GateAction(decision, resource=APP_ENTRY_RESOURCE)
    return GateAction(decision)
