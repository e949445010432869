"""File-open access logging."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from vaultgate.exceptions import BackendNotConfiguredError, ServiceError, ValidationError

if TYPE_CHECKING:
    from vaultgate.schemas.script import LogAccessResponse
    from vaultgate.services.script_client import ScriptClient

logger = logging.getLogger(__name__)

LOG_ACCESS_FAILED_MESSAGE = "Failed to log access."


async def record_file_access(
    client: ScriptClient, email: str, file_name: str
) -> LogAccessResponse:
    """Log that ``email`` opened ``file_name``; raise ServiceError if it was not stored."""
    if not email or not file_name:
        raise ValidationError("Email and fileName are required.")

    try:
        response = await client.log_access(email, file_name)
    except BackendNotConfiguredError:
        raise
    except ServiceError as exc:
        raise ServiceError(LOG_ACCESS_FAILED_MESSAGE, detail=exc.detail) from exc

    if not response.success:
        raise ServiceError(
            LOG_ACCESS_FAILED_MESSAGE,
            detail=f"logAccess: {response.error or 'backend reported failure'}",
        )
    logger.debug("Logged access to %r (count=%s)", file_name, response.access_count)
    return response
