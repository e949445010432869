"""Shared-password verification against the backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from vaultgate.exceptions import BackendError

if TYPE_CHECKING:
    from vaultgate.services.script_client import ScriptClient

logger = logging.getLogger(__name__)


async def verify_password(client: ScriptClient, candidate: str) -> bool:
    """Return whether ``candidate`` equals the portal password.

    The password is fetched on every call so it can be rotated in the Sheet
    without a redeploy.  Raises ``ServiceError`` when the backend cannot
    produce a password; that case must not count as a failed attempt.
    """
    response = await client.get_password()
    if not response.success or not response.password:
        logger.error("Password lookup failed: %s", response.error or "no password returned")
        raise BackendError("getPassword", response.error or "no password returned")
    return candidate == response.password
