"""Shared API dependencies: settings, rate limiter, backend client, client key."""

from __future__ import annotations

from fastapi import Request

from vaultgate.config import Settings
from vaultgate.services.rate_limit_service import FailedLoginLimiter
from vaultgate.services.script_client import ScriptClient


def get_settings(request: Request) -> Settings:
    """Get application settings from app state."""
    settings: Settings = request.app.state.settings
    return settings


def get_rate_limiter(request: Request) -> FailedLoginLimiter:
    """Get the process-wide failed-login limiter from app state."""
    limiter: FailedLoginLimiter = request.app.state.rate_limiter
    return limiter


def get_script_client(request: Request) -> ScriptClient:
    """Get the backend client from app state."""
    client: ScriptClient = request.app.state.script_client
    return client


def get_client_key(request: Request) -> str:
    """Identify the caller by source address, honouring proxy headers."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        first = forwarded_for.split(",", maxsplit=1)[0].strip()
        if first:
            return first
    real_ip = request.headers.get("X-Real-IP")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"
