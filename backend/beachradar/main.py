# beachradar/main.py
from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv, find_dotenv
from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from beachradar import gate_errors
from beachradar.access_guard import AccessGateMiddleware
from beachradar.config import ConfigProvider, configure_logging, env_config
from beachradar.routers import app_access
from beachradar.schemas import HealthOut

SERVICE_NAME = "beachradar-gate"
SERVICE_VERSION = "0.1.0"

logger = logging.getLogger(__name__)


# -------------------------------------------------
# LOAD .env (only for env-backed apps, never on import)
# -------------------------------------------------
def load_env() -> None:
    env_path = find_dotenv(usecwd=True)
    load_dotenv(env_path, override=False)

    # Optional boot debug (safe): never prints the key itself
    if (os.getenv("DEBUG_ENV") or "").strip().lower() in ("1", "true", "yes", "on"):
        logger.info("DOTENV PATH = %s", env_path)
        logger.info("APP_SHELL_DIR = %s", os.getenv("APP_SHELL_DIR"))
        logger.info("APP_ACCESS_KEY set = %s", bool(os.getenv("APP_ACCESS_KEY")))


# -------------------------------------------------
# APP SETUP
# -------------------------------------------------
def create_app(config_provider: Optional[ConfigProvider] = None) -> FastAPI:
    """
    Build the gate app.

    config_provider defaults to reading the environment on every request
    (after loading .env and configuring logging); tests pass
    beachradar.config.static_config(...) and touch no process-wide state.
    """
    if config_provider is None:
        configure_logging()
        load_env()
    provider = config_provider or env_config

    app = FastAPI(title="Beach Radar Gate", version=SERVICE_VERSION)
    app.state.config_provider = provider

    app.add_middleware(AccessGateMiddleware, config_provider=provider)

    app.add_exception_handler(gate_errors.AccessConfigError, gate_errors.access_config_error_handler)
    app.add_exception_handler(StarletteHTTPException, gate_errors.http_exception_handler)

    # Routers
    app.include_router(app_access.router)

    @app.get("/api/health", response_model=HealthOut)
    def health(request: Request):
        config = request.app.state.config_provider()
        return HealthOut(
            service=SERVICE_NAME,
            version=SERVICE_VERSION,
            access_key_configured=config.has_access_key,
        )

    # Public pages (waitlist, privacy, assets). Only what the gate lets through gets here.
    public_dir = provider().public_dir
    if public_dir is not None:
        if public_dir.is_dir():
            app.mount("/", StaticFiles(directory=str(public_dir), html=True), name="public")
        else:
            logger.warning("PUBLIC_DIR %s does not exist; public pages not mounted", public_dir)

    return app


def serve() -> None:
    """
    Console entry point (needs the "serve" extra):
        beachradar-gate
    Same as: uvicorn beachradar.main:create_app --factory
    """
    import uvicorn

    uvicorn.run(
        create_app(),
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )
