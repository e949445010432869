"""Health check endpoint."""

from __future__ import annotations

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from vaultgate.api.deps import get_script_client
from vaultgate.exceptions import BackendNotConfiguredError, ServiceError
from vaultgate.services.datetime_service import format_iso, now_utc
from vaultgate.services.script_client import ScriptClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"]
    version: str
    backend: Literal["ok", "error", "not_configured"]
    timestamp: str


@router.get("/api/health", response_model=HealthResponse)
async def health_check(
    client: Annotated[ScriptClient, Depends(get_script_client)],
) -> HealthResponse:
    """Health check endpoint for monitoring and load balancers."""
    backend_status: Literal["ok", "error", "not_configured"] = "ok"
    try:
        backend_health = await client.health()
        if backend_health.status != "ok":
            backend_status = "error"
    except BackendNotConfiguredError:
        backend_status = "not_configured"
    except ServiceError:
        logger.warning("Health check backend call failed", exc_info=True)
        backend_status = "error"

    return HealthResponse(
        status="ok" if backend_status == "ok" else "degraded",
        version="0.1.0",
        backend=backend_status,
        timestamp=format_iso(now_utc()),
    )
