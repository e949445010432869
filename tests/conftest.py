"""Shared test fixtures for VaultGate."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient

from vaultgate.config import Settings
from vaultgate.main import create_app
from vaultgate.schemas.script import (
    BackendHealthResponse,
    GetAccessCountResponse,
    GetPasswordResponse,
    ListFilesResponse,
    LogAccessResponse,
)
from vaultgate.services.rate_limit_service import FailedLoginLimiter

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

TEST_PASSWORD = "correct-horse-battery"
TEST_SCRIPT_URL = "https://script.example.com/macros/s/abc/exec"

SAMPLE_FILES: list[dict[str, Any]] = [
    {
        "id": "doc-1",
        "name": "Q3 Investor Update",
        "mimeType": "application/vnd.google-apps.document",
        "webViewLink": "https://docs.google.com/document/d/doc-1/edit",
        "iconLink": "https://drive-thirdparty.googleusercontent.com/16/type/doc",
        "createdDate": "2026-01-10T09:00:00.000Z",
        "modifiedDate": "2026-02-01T12:30:00.000Z",
        "fileType": "doc",
    },
    {
        "id": "pdf-1",
        "name": "Term Sheet.pdf",
        "mimeType": "application/pdf",
        "webViewLink": "https://drive.google.com/file/d/pdf-1/view",
        "iconLink": "https://drive-thirdparty.googleusercontent.com/16/type/pdf",
        "createdDate": "2026-01-11T09:00:00.000Z",
        "modifiedDate": "2026-01-11T09:00:00.000Z",
        "fileType": "pdf",
    },
]


class FakeClock:
    """Manually advanced clock for the rate limiter."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeScriptClient:
    """In-process stand-in for ScriptClient.

    Set ``password`` to None to simulate a backend without a password, or put
    an exception in ``failures[action]`` to make that call raise it.
    """

    def __init__(self) -> None:
        self.password: str | None = TEST_PASSWORD
        self.files: list[dict[str, Any]] | None = list(SAMPLE_FILES)
        self.list_success = True
        self.log_success = True
        self.access_count = 0
        self.failures: dict[str, Exception] = {}
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    def _maybe_fail(self, action: str) -> None:
        exc = self.failures.get(action)
        if exc is not None:
            raise exc

    async def get_password(self) -> GetPasswordResponse:
        self.calls.append(("getPassword", ()))
        self._maybe_fail("getPassword")
        if self.password is None:
            return GetPasswordResponse(success=False, error="Password not set")
        return GetPasswordResponse(success=True, password=self.password)

    async def list_files(self) -> ListFilesResponse:
        self.calls.append(("listFiles", ()))
        self._maybe_fail("listFiles")
        if not self.list_success:
            return ListFilesResponse(success=False, error="Folder not found")
        files = self.files or []
        return ListFilesResponse.model_validate(
            {"success": True, "files": files, "count": len(files)}
        )

    async def log_access(self, email: str, file_name: str) -> LogAccessResponse:
        self.calls.append(("logAccess", (email, file_name)))
        self._maybe_fail("logAccess")
        if not self.log_success:
            return LogAccessResponse(success=False, error="Sheet locked")
        self.access_count += 1
        return LogAccessResponse(
            success=True,
            accessCount=self.access_count,
            timestamp="2026-02-02T10:00:00.000Z",
        )

    async def get_access_count(self, email: str) -> GetAccessCountResponse:
        self.calls.append(("getAccessCount", (email,)))
        self._maybe_fail("getAccessCount")
        return GetAccessCountResponse(success=True, count=self.access_count)

    async def health(self) -> BackendHealthResponse:
        self.calls.append(("health", ()))
        self._maybe_fail("health")
        return BackendHealthResponse(status="ok", timestamp="2026-02-02T10:00:00.000Z")

    async def aclose(self) -> None:
        return None

    def actions(self) -> list[str]:
        return [action for action, _ in self.calls]


@asynccontextmanager
async def create_test_client(
    settings: Settings,
    script_client: Any,
    limiter: FailedLoginLimiter | None = None,
) -> AsyncGenerator[AsyncClient]:
    """Create an HTTP test client with app state populated.

    ASGITransport does not run the lifespan, so the backend client is
    installed on app.state directly.
    """
    app = create_app(settings)
    settings.validate_runtime_security()
    app.state.script_client = script_client
    if limiter is not None:
        app.state.rate_limiter = limiter

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Create test settings that never read a local .env file."""
    return Settings(
        _env_file=None,
        debug=True,
        google_apps_script_url=TEST_SCRIPT_URL,
        frontend_dir=tmp_path / "frontend",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock: FakeClock) -> FailedLoginLimiter:
    return FailedLoginLimiter(clock=clock)


@pytest.fixture
def fake_backend() -> FakeScriptClient:
    return FakeScriptClient()


@pytest.fixture
async def client(
    test_settings: Settings,
    fake_backend: FakeScriptClient,
    limiter: FailedLoginLimiter,
) -> AsyncGenerator[AsyncClient]:
    """Test HTTP client backed by the fake backend and a fake-clock limiter."""
    async with create_test_client(test_settings, fake_backend, limiter) as ac:
        yield ac
