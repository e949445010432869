"""Application-level exception types.

Convention:
- Every ``PortalError`` carries an HTTP status and a ``message`` that is safe
  to show to users.  The global handler in ``vaultgate/main.py`` renders it as
  ``{"success": false, "error": message}`` and logs the technical ``detail``
  server-side only.
- ``ServiceError`` and its subclasses mean a dependency is broken, not that
  the user did something wrong.  They must never count as a failed login.
- Problems in optional post-login steps (access logging, file listing) are
  not raised at all; the login service downgrades them to a warning string.
"""

from __future__ import annotations

from typing import Any

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


class PortalError(Exception):
    """Base class for errors that terminate a request with a known status."""

    status_code = 500
    default_message = GENERIC_ERROR_MESSAGE

    def __init__(self, message: str | None = None, *, detail: str | None = None) -> None:
        self.message = message or self.default_message
        self.detail = detail or self.message
        super().__init__(self.detail)

    def response_extras(self) -> dict[str, Any]:
        """Extra fields merged into the JSON error body."""
        return {}


class ValidationError(PortalError):
    """Malformed input. Never touches the rate limiter."""

    status_code = 400
    default_message = "Invalid request."


class AuthenticationError(PortalError):
    """Wrong password."""

    status_code = 401
    default_message = "Incorrect password. Please try again."


class RateLimitError(PortalError):
    """The client key is blocked after too many failed attempts."""

    status_code = 429

    def __init__(self, minutes_remaining: int) -> None:
        self.minutes_remaining = minutes_remaining
        super().__init__(
            f"Too many failed attempts. Please try again in {minutes_remaining} minutes."
        )

    def response_extras(self) -> dict[str, Any]:
        return {"blocked": True, "minutesRemaining": self.minutes_remaining}


class ServiceError(PortalError):
    """A backend dependency is unreachable or misconfigured."""

    status_code = 500
    default_message = "Unable to verify credentials. Please contact support."


class BackendError(ServiceError):
    """The document backend failed to answer a call usefully."""

    def __init__(self, action: str, detail: str) -> None:
        self.action = action
        super().__init__(detail=f"{action}: {detail}")


class BackendNotConfiguredError(ServiceError):
    """No backend endpoint URL is configured."""

    default_message = "Service not configured. Please contact support."

    def __init__(self) -> None:
        super().__init__(detail="GOOGLE_APPS_SCRIPT_URL is not configured")
