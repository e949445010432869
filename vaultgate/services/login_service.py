"""Login flow: input check, throttling, password check, access log, file listing."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from vaultgate.exceptions import (
    AuthenticationError,
    RateLimitError,
    ServiceError,
    ValidationError,
)
from vaultgate.services.credential_service import verify_password

if TYPE_CHECKING:
    from vaultgate.schemas.files import VaultFile
    from vaultgate.services.rate_limit_service import FailedLoginLimiter
    from vaultgate.services.script_client import ScriptClient

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

LOGIN_ACCESS_LABEL = "Login"
CONTENT_UNAVAILABLE_MESSAGE = "Unable to load content. Files may be temporarily unavailable."


@dataclass
class LoginResult:
    """Outcome of a successful login.

    ``warning`` is set when authentication succeeded but the file listing
    could not be loaded; ``files`` is then empty.
    """

    files: list[VaultFile] = field(default_factory=list)
    count: int | None = None
    warning: str | None = None


def is_valid_email(email: str) -> bool:
    return _EMAIL_RE.match(email) is not None


def validate_credentials_input(email: str, password: str) -> None:
    """Raise ValidationError for missing fields or a malformed email."""
    if not email or not password:
        raise ValidationError("Email and password are required.")
    if not is_valid_email(email):
        raise ValidationError("Invalid email format.")


async def _log_login(client: ScriptClient, email: str) -> None:
    try:
        response = await client.log_access(email, LOGIN_ACCESS_LABEL)
    except ServiceError as exc:
        logger.warning("Failed to log access for login: %s", exc.detail)
        return
    if not response.success:
        logger.warning("Backend rejected login access log: %s", response.error)


async def _load_files(client: ScriptClient) -> LoginResult:
    try:
        response = await client.list_files()
    except ServiceError as exc:
        logger.error("Failed to fetch files: %s", exc.detail)
        return LoginResult(warning=CONTENT_UNAVAILABLE_MESSAGE)
    if not response.success:
        logger.error("Backend failed to list files: %s", response.error)
        return LoginResult(warning=CONTENT_UNAVAILABLE_MESSAGE)

    files = response.files or []
    count = response.count if response.count is not None else len(files)
    return LoginResult(files=files, count=count)


async def login(
    limiter: FailedLoginLimiter,
    client: ScriptClient,
    client_key: str,
    email: str,
    password: str,
) -> LoginResult:
    """Authenticate with the shared password and return the visible files.

    Raises ValidationError, RateLimitError, ServiceError or
    AuthenticationError.  Only a password mismatch is recorded against
    ``client_key``; a blocked key never reaches the backend.
    """
    validate_credentials_input(email, password)

    if limiter.is_blocked(client_key):
        minutes = limiter.get_block_time_remaining(client_key)
        logger.info("Rejected login from blocked client %s (%d min left)", client_key, minutes)
        raise RateLimitError(minutes)

    if not await verify_password(client, password):
        attempts = limiter.record_failed_attempt(client_key)
        logger.info("Failed login from %s (attempt %d)", client_key, attempts)
        if limiter.is_blocked(client_key):
            minutes = limiter.get_block_time_remaining(client_key)
            logger.warning(
                "Blocking client %s for %d minutes after %d failed attempts",
                client_key,
                minutes,
                attempts,
            )
            raise RateLimitError(minutes)
        raise AuthenticationError

    limiter.reset_attempts(client_key)
    logger.info("Successful login from %s", client_key)
    await _log_login(client, email)
    return await _load_files(client)
