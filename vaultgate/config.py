"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """VaultGate application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    debug: bool = False
    expose_docs: bool = False

    # Document backend (Google Apps Script web app)
    google_apps_script_url: str | None = None
    script_timeout_seconds: float = Field(default=10.0, gt=0)

    # Paths
    frontend_dir: Path = Path("./frontend/dist")

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)

    # CORS
    cors_origins: list[str] = Field(default_factory=list)
    trusted_hosts: list[str] = Field(default_factory=list)

    # Login throttling
    login_max_failures: int = Field(default=3, ge=1)
    login_block_minutes: int = Field(default=15, ge=1)

    # Response hardening
    security_headers_enabled: bool = True
    content_security_policy: str = (
        "default-src 'self'; "
        "script-src 'self'; "
        "style-src 'self' 'unsafe-inline'; "
        "img-src 'self' https: data:; "
        "font-src 'self' data:; "
        "connect-src 'self'; "
        "frame-src https://docs.google.com https://drive.google.com https://www.youtube.com; "
        "base-uri 'self'; "
        "form-action 'self'; "
        "frame-ancestors 'none'"
    )

    @property
    def script_configured(self) -> bool:
        return bool(self.google_apps_script_url and self.google_apps_script_url.strip())

    def validate_runtime_security(self) -> None:
        """Validate security-critical production settings.

        A missing script URL is not an error here: it is reported at first use
        so the portal can still start and answer health checks.
        """
        if self.debug:
            return

        violations: list[str] = []
        if not self.trusted_hosts:
            violations.append("TRUSTED_HOSTS must be configured in production")
        if self.script_configured and not str(self.google_apps_script_url).startswith("https://"):
            violations.append("GOOGLE_APPS_SCRIPT_URL must use https in production")

        if violations:
            joined = "; ".join(violations)
            raise ValueError(f"Insecure production configuration: {joined}")
