# beachradar/config.py
from __future__ import annotations

"""
Runtime configuration for the access gate.

Everything comes from environment variables (a .env file is loaded once by
beachradar.main). Values are read at request time through a provider so
tests can hand the app a fixed config instead of touching os.environ.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

ACCESS_KEY_ENV = "APP_ACCESS_KEY"
APP_SHELL_DIR_ENV = "APP_SHELL_DIR"
PUBLIC_DIR_ENV = "PUBLIC_DIR"
LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_APP_SHELL_DIR = "dist"


@dataclass(frozen=True)
class AccessConfig:
    access_key: Optional[str] = None
    app_shell_dir: Path = Path(DEFAULT_APP_SHELL_DIR)
    public_dir: Optional[Path] = None

    @property
    def has_access_key(self) -> bool:
        return bool(self.access_key)


ConfigProvider = Callable[[], AccessConfig]


def unquote(value: str) -> str:
    """
    Secrets pasted into dashboards/.env files often keep their shell quotes.
    Strip whitespace, then ONE pair of matching surrounding quotes.
    """
    trimmed = value.strip()
    if len(trimmed) >= 2 and trimmed[0] == trimmed[-1] and trimmed[0] in ("'", '"'):
        return trimmed[1:-1]
    return trimmed


def read_env(name: str) -> Optional[str]:
    raw = os.getenv(name)
    if not raw:
        return None
    return unquote(raw)


def env_config() -> AccessConfig:
    """
    Default provider: reads os.environ every time it is called.
    """
    public_dir = read_env(PUBLIC_DIR_ENV)
    return AccessConfig(
        access_key=read_env(ACCESS_KEY_ENV) or None,
        app_shell_dir=Path(read_env(APP_SHELL_DIR_ENV) or DEFAULT_APP_SHELL_DIR),
        public_dir=Path(public_dir) if public_dir else None,
    )


def static_config(
    access_key: Optional[str] = None,
    app_shell_dir: Optional[Path] = None,
    public_dir: Optional[Path] = None,
) -> ConfigProvider:
    """
    Fixed provider (tests, scripts). Quoted keys are unquoted like env values.
    """
    config = AccessConfig(
        access_key=unquote(access_key) if access_key else None,
        app_shell_dir=Path(app_shell_dir) if app_shell_dir else Path(DEFAULT_APP_SHELL_DIR),
        public_dir=Path(public_dir) if public_dir else None,
    )
    return lambda: config


def configure_logging(level: Optional[str] = None) -> None:
    level_name = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").strip().upper()
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))
