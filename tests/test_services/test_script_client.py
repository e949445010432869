"""Tests for the Apps Script backend client."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from vaultgate.exceptions import BackendError, BackendNotConfiguredError, ServiceError
from vaultgate.services.script_client import ScriptClient

SCRIPT_URL = "https://script.example.com/macros/s/abc/exec"


@pytest.fixture
async def script_client() -> Any:
    client = ScriptClient(SCRIPT_URL, httpx.AsyncClient())
    yield client
    await client.aclose()


def _request(method: str = "GET") -> httpx.Request:
    return httpx.Request(method, SCRIPT_URL)


class TestRequests:
    async def test_get_password_sends_action(
        self, script_client: ScriptClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        captured: dict[str, Any] = {}

        async def mock_get(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            captured["url"] = url
            captured["params"] = kwargs.get("params")
            return httpx.Response(
                200, json={"success": True, "password": "s3cret"}, request=_request()
            )

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)
        result = await script_client.get_password()
        assert result.success
        assert result.password == "s3cret"
        assert captured == {"url": SCRIPT_URL, "params": {"action": "getPassword"}}

    async def test_list_files_parses_entries(
        self, script_client: ScriptClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "count": 1,
                    "files": [
                        {
                            "id": "vid-1",
                            "name": "Demo",
                            "mimeType": "text/plain",
                            "webViewLink": "https://drive.google.com/file/d/vid-1/view",
                            "iconLink": "",
                            "createdDate": "2026-01-10T09:00:00.000Z",
                            "modifiedDate": "2026-01-10T09:00:00.000Z",
                            "fileType": "youtube",
                            "youtubeUrl": "https://youtu.be/dQw4w9WgXcQ",
                        }
                    ],
                },
                request=_request(),
            )

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)
        result = await script_client.list_files()
        assert result.count == 1
        assert result.files is not None
        video = result.files[0]
        assert video.file_type == "youtube"
        assert video.embed_url == "https://www.youtube.com/embed/dQw4w9WgXcQ"

    async def test_log_access_posts_json(
        self, script_client: ScriptClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        captured: dict[str, Any] = {}

        async def mock_post(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            captured["json"] = kwargs.get("json")
            return httpx.Response(
                200,
                json={"success": True, "accessCount": 4, "timestamp": "2026-02-02T10:00:00Z"},
                request=_request("POST"),
            )

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)
        result = await script_client.log_access("a@example.com", "Deck.pdf")
        assert result.access_count == 4
        assert captured["json"] == {
            "action": "logAccess",
            "email": "a@example.com",
            "fileName": "Deck.pdf",
        }

    async def test_get_access_count_passes_email(
        self, script_client: ScriptClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        captured: dict[str, Any] = {}

        async def mock_get(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            captured["params"] = kwargs.get("params")
            return httpx.Response(200, json={"success": True, "count": 7}, request=_request())

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)
        result = await script_client.get_access_count("a@example.com")
        assert result.count == 7
        assert captured["params"] == {"action": "getAccessCount", "email": "a@example.com"}

    async def test_unsuccessful_answer_is_returned(
        self, script_client: ScriptClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            return httpx.Response(
                200, json={"success": False, "error": "Folder not found"}, request=_request()
            )

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)
        result = await script_client.list_files()
        assert not result.success
        assert result.error == "Folder not found"


class TestFailures:
    async def test_not_configured(self) -> None:
        client = ScriptClient(None, httpx.AsyncClient())
        try:
            assert not client.configured
            with pytest.raises(BackendNotConfiguredError):
                await client.get_password()
        finally:
            await client.aclose()

    async def test_blank_url_is_not_configured(self) -> None:
        client = ScriptClient("   ", httpx.AsyncClient())
        try:
            with pytest.raises(BackendNotConfiguredError):
                await client.health()
        finally:
            await client.aclose()

    async def test_connect_error(
        self, script_client: ScriptClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            raise httpx.ConnectError("refused")

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)
        with pytest.raises(BackendError, match="getPassword"):
            await script_client.get_password()

    async def test_timeout(
        self, script_client: ScriptClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            raise httpx.ReadTimeout("timed out")

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)
        with pytest.raises(BackendError, match="timed out"):
            await script_client.list_files()

    async def test_http_error_status(
        self, script_client: ScriptClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            return httpx.Response(503, text="Service Unavailable", request=_request())

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)
        with pytest.raises(BackendError, match="503"):
            await script_client.get_password()

    async def test_non_json_body(
        self, script_client: ScriptClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            return httpx.Response(200, text="<html>Sign in</html>", request=_request())

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)
        with pytest.raises(BackendError, match="not JSON"):
            await script_client.get_password()

    async def test_unexpected_shape(
        self, script_client: ScriptClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            return httpx.Response(
                200, json={"success": True, "files": "not-a-list"}, request=_request()
            )

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)
        with pytest.raises(BackendError, match="unexpected response shape"):
            await script_client.list_files()

    async def test_invalid_url_is_backend_error(self) -> None:
        client = ScriptClient("https://exa mple.com/\x7f", httpx.AsyncClient())
        try:
            assert client.configured
            with pytest.raises(BackendError, match="invalid backend URL"):
                await client.get_password()
        finally:
            await client.aclose()

    async def test_backend_errors_are_service_errors(self) -> None:
        exc = BackendError("listFiles", "boom")
        assert isinstance(exc, ServiceError)
        assert exc.status_code == 500
        assert "boom" not in exc.message


class TestListingTolerance:
    async def test_malformed_entry_is_skipped(
        self, script_client: ScriptClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "files": [
                        {"name": "no id"},
                        {"id": "doc-2", "name": "Deck", "fileType": "slides"},
                    ],
                },
                request=_request(),
            )

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)
        result = await script_client.list_files()
        assert result.files is not None
        assert [f.id for f in result.files] == ["doc-2"]

    async def test_null_dates_are_accepted(
        self, script_client: ScriptClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(self: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "files": [
                        {"id": "pdf-2", "name": "Memo", "createdDate": None, "modifiedDate": None}
                    ],
                },
                request=_request(),
            )

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)
        result = await script_client.list_files()
        assert result.files is not None
        assert result.files[0].created_date == ""
        assert result.files[0].modified_date == ""
