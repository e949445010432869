"""Client for the Google Apps Script web app that fronts the Drive folder and Sheet."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
import pydantic

from vaultgate.exceptions import BackendError, BackendNotConfiguredError
from vaultgate.schemas.script import (
    BackendHealthResponse,
    GetAccessCountResponse,
    GetPasswordResponse,
    ListFilesResponse,
    LogAccessResponse,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from vaultgate.config import Settings

logger = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=pydantic.BaseModel)

_HEADERS = {"Accept": "application/json"}


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the shared HTTP client used for backend calls.

    Apps Script deployments answer with a redirect to the content host, so
    redirects must be followed.
    """
    return httpx.AsyncClient(
        timeout=settings.script_timeout_seconds,
        follow_redirects=True,
        headers=_HEADERS,
    )


class ScriptClient:
    """Typed wrapper around the backend's ``action``-dispatched endpoint.

    Every failure (no URL configured, malformed URL, transport error, timeout,
    non-2xx status, non-JSON or unexpected body) raises a ``ServiceError``
    subclass.
    A well-formed ``{"success": false}`` answer is returned to the caller.
    """

    def __init__(self, base_url: str | None, http_client: httpx.AsyncClient) -> None:
        self._base_url = base_url.strip() if base_url else None
        self._http = http_client

    @property
    def configured(self) -> bool:
        return bool(self._base_url)

    async def aclose(self) -> None:
        await self._http.aclose()

    def _require_url(self) -> str:
        if not self._base_url:
            logger.error("Backend call attempted but GOOGLE_APPS_SCRIPT_URL is not set")
            raise BackendNotConfiguredError
        return self._base_url

    async def _send(self, action: str, request: Awaitable[httpx.Response]) -> Any:
        try:
            response = await request
        except httpx.TimeoutException as exc:
            logger.warning("Backend action %s timed out: %s", action, exc)
            raise BackendError(action, "request timed out") from exc
        except httpx.InvalidURL as exc:
            logger.error("Backend action %s has an invalid URL: %s", action, exc)
            raise BackendError(action, "invalid backend URL") from exc
        except httpx.HTTPError as exc:
            logger.warning("Backend action %s failed: %s", action, exc)
            raise BackendError(action, f"request failed: {exc}") from exc

        if not response.is_success:
            logger.warning(
                "Backend action %s returned HTTP %d: %s",
                action,
                response.status_code,
                response.reason_phrase,
            )
            raise BackendError(action, f"request failed with status {response.status_code}")

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("Backend action %s returned a non-JSON body", action)
            raise BackendError(action, "response was not JSON") from exc

    async def _get(self, action: str, params: dict[str, str] | None = None) -> Any:
        url = self._require_url()
        query = {"action": action, **(params or {})}
        return await self._send(action, self._http.get(url, params=query))

    async def _post(self, action: str, body: dict[str, str]) -> Any:
        url = self._require_url()
        payload = {"action": action, **body}
        return await self._send(action, self._http.post(url, json=payload))

    @staticmethod
    def _parse(action: str, model: type[_ModelT], data: Any) -> _ModelT:
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as exc:
            logger.warning("Backend action %s returned an unexpected body: %s", action, exc)
            raise BackendError(action, "unexpected response shape") from exc

    async def get_password(self) -> GetPasswordResponse:
        data = await self._get("getPassword")
        return self._parse("getPassword", GetPasswordResponse, data)

    async def list_files(self) -> ListFilesResponse:
        data = await self._get("listFiles")
        return self._parse("listFiles", ListFilesResponse, data)

    async def log_access(self, email: str, file_name: str) -> LogAccessResponse:
        """Append an access row for ``email`` opening ``file_name``."""
        data = await self._post("logAccess", {"email": email, "fileName": file_name})
        return self._parse("logAccess", LogAccessResponse, data)

    async def get_access_count(self, email: str) -> GetAccessCountResponse:
        data = await self._get("getAccessCount", {"email": email})
        return self._parse("getAccessCount", GetAccessCountResponse, data)

    async def health(self) -> BackendHealthResponse:
        data = await self._get("health")
        return self._parse("health", BackendHealthResponse, data)
