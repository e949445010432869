"""File access logging endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from vaultgate.api.deps import get_script_client
from vaultgate.schemas.access import LogAccessRequest, LogAccessResult
from vaultgate.services.access_service import record_file_access
from vaultgate.services.script_client import ScriptClient

router = APIRouter(prefix="/api", tags=["access"])


@router.post("/log-access", response_model=LogAccessResult, response_model_exclude_none=True)
async def log_access(
    body: LogAccessRequest,
    client: Annotated[ScriptClient, Depends(get_script_client)],
) -> LogAccessResult:
    """Record that a user opened a file."""
    response = await record_file_access(client, body.email, body.file_name)
    return LogAccessResult(access_count=response.access_count, timestamp=response.timestamp)
