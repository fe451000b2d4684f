"""Shared fixtures: an app shell on disk, public pages, and gate apps built on fixed config."""
import pytest
from fastapi.testclient import TestClient

from beachradar.config import static_config
from beachradar.main import create_app

ACCESS_KEY = "test-app-access-key"
APP_HTML = "<!doctype html><div data-testid=\"app-root\"></div>"
WAITLIST_HTML = "<!doctype html><h1>Join the waitlist</h1>"


@pytest.fixture
def app_shell_dir(tmp_path):
    shell = tmp_path / "dist"
    shell.mkdir()
    (shell / "index.html").write_text(APP_HTML)
    return shell


@pytest.fixture
def public_dir(tmp_path):
    public = tmp_path / "public"
    (public / "waitlist").mkdir(parents=True)
    (public / "privacy").mkdir()
    (public / "assets").mkdir()
    (public / "waitlist" / "index.html").write_text(WAITLIST_HTML)
    (public / "privacy" / "index.html").write_text("<h1>Privacy</h1>")
    (public / "assets" / "app.js").write_text("console.log('beach');")
    (public / "robots.txt").write_text("User-agent: *\n")
    return public


def make_client(access_key, app_shell_dir, public_dir=None):
    provider = static_config(access_key=access_key, app_shell_dir=app_shell_dir, public_dir=public_dir)
    return TestClient(create_app(provider), follow_redirects=False)


@pytest.fixture
def client(app_shell_dir, public_dir):
    return make_client(ACCESS_KEY, app_shell_dir, public_dir)


@pytest.fixture
def unconfigured_client(app_shell_dir, public_dir):
    return make_client(None, app_shell_dir, public_dir)
