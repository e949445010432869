"""Login endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from vaultgate.api.deps import get_client_key, get_rate_limiter, get_script_client
from vaultgate.schemas.auth import LoginRequest, LoginResponse
from vaultgate.services.login_service import login as login_flow
from vaultgate.services.rate_limit_service import FailedLoginLimiter
from vaultgate.services.script_client import ScriptClient

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
async def login(
    body: LoginRequest,
    limiter: Annotated[FailedLoginLimiter, Depends(get_rate_limiter)],
    client: Annotated[ScriptClient, Depends(get_script_client)],
    client_key: Annotated[str, Depends(get_client_key)],
) -> LoginResponse:
    """Check the shared password and return the file list."""
    result = await login_flow(limiter, client, client_key, body.email, body.password)
    return LoginResponse(files=result.files, count=result.count, error=result.warning)
