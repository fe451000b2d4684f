import pytest

from beachradar.gate_paths import PathClass, classify, sanitize_app_path


@pytest.mark.parametrize(
    "path",
    ["/favicon.ico", "/robots.txt", "/manifest.webmanifest", "/assets/app.js", "/_next/static/x.js", "/og/share.png"],
)
def test_static_assets(path):
    assert classify(path) == PathClass.STATIC


def test_api_prefix():
    assert classify("/api/app-access") == PathClass.API
    assert classify("/api") == PathClass.API


def test_root_is_its_own_class():
    assert classify("/") == PathClass.ROOT


def test_public_pages():
    assert classify("/waitlist/") == PathClass.WAITLIST
    assert classify("/waitlist") == PathClass.WAITLIST
    assert classify("/privacy/") == PathClass.PRIVACY


def test_app_prefix_boundary():
    assert classify("/app") == PathClass.APP_PROTECTED
    assert classify("/app/") == PathClass.APP_PROTECTED
    assert classify("/app/beach/BR-RN-001") == PathClass.APP_PROTECTED
    # Shares the letters, not the prefix
    assert classify("/apple") == PathClass.OTHER


def test_everything_else_is_other():
    assert classify("/foo/bar") == PathClass.OTHER
    assert classify("/index.html") == PathClass.OTHER
    assert classify("") == PathClass.OTHER


def test_sanitize_app_path():
    assert sanitize_app_path(None) == "/app/"
    assert sanitize_app_path("   ") == "/app/"
    assert sanitize_app_path("/app") == "/app"
    assert sanitize_app_path("app/map") == "/app/map"
    assert sanitize_app_path(" /app/map?beachId=1 ") == "/app/map?beachId=1"
    assert sanitize_app_path("/waitlist/") == "/app/"
    assert sanitize_app_path("//evil.example/app/") == "/app/"
    assert sanitize_app_path("https://evil.example/app/") == "/app/"
