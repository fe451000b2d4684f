# beachradar/schemas.py
from typing import Literal

from pydantic import BaseModel


# -----------------------------
# HEALTH
# -----------------------------
class HealthOut(BaseModel):
    ok: bool = True
    service: str
    version: str
    access_key_configured: bool


# -----------------------------
# ERRORS
# -----------------------------
class ErrorOut(BaseModel):
    ok: Literal[False] = False
    error: str
