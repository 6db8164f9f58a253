"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

import logging
import ssl
from functools import lru_cache
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from schemaform.exceptions import SettingsError

logger = logging.getLogger(__name__)

DEFAULT_HIDDEN_KEYS: tuple[str, ...] = (
    "_id",
    "mappingID",
    "discardDemographic",
    "isCEdarEnabled",
    "sourceSystem",
    "alertType",
    "templateStatus",
    "destinationSystem",
    "numberOfApprovals",
    "locale",
    "breakOpen",
    "enableC360Demographics",
    "enableEbnc",
    "sendToRaven",
)


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = "schemaform"
    app_env: str = Field(
        default="dev",
        validation_alias="APP_ENV",
        description="Application environment, e.g. 'dev', 'prod'.",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )

    schema_source: str = Field(
        default="schema.json",
        validation_alias="SCHEMA_SOURCE",
        description="File path or http(s) URL serving the default schema text.",
    )
    submit_url: str | None = Field(
        default=None,
        validation_alias="SUBMIT_URL",
        description="Endpoint accepting the exported payload.",
    )
    output_path: str = Field(
        default="form-output.json",
        validation_alias="OUTPUT_PATH",
        description="Local path of the export artifact.",
    )
    hidden_keys: tuple[str, ...] = Field(
        default=DEFAULT_HIDDEN_KEYS,
        validation_alias="HIDDEN_KEYS",
        description="Dot-path patterns hidden from the UI but kept in the flow and export.",
    )

    http_proxy: str | None = Field(default=None, validation_alias="HTTP_PROXY", description="HTTP proxy URL.")
    https_proxy: str | None = Field(
        default=None,
        validation_alias="HTTPS_PROXY",
        description="HTTPS proxy URL.",
    )
    cert_path: str | None = Field(
        default=None,
        validation_alias="CERT_PATH",
        description="Path to SSL certificate.",
    )
    timeout: float = Field(
        default=30.0,
        validation_alias="TIMEOUT",
        description="Request timeout in seconds.",
    )

    @field_validator("hidden_keys")
    @classmethod
    def _strip_blank_hidden_keys(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Drop empty patterns, which never match anything."""
        return tuple(pattern.strip() for pattern in value if pattern.strip())

    @field_validator("submit_url")
    @classmethod
    def _require_http_submit_url(cls, value: str | None) -> str | None:
        """Reject submission URLs that are not http(s)."""
        if value is None:
            return None
        if urlparse(value).scheme not in {"http", "https"}:
            message = f"SUBMIT_URL must be an http(s) URL, got: {value}"
            raise ValueError(message)
        return value


def build_ssl_context(settings: Settings) -> ssl.SSLContext:
    """Build a strict SSL context from settings.

    Args:
        settings (Settings): Runtime settings.

    Returns:
        ssl.SSLContext: Configured TLS context.
    """
    ssl_context = ssl.create_default_context(cafile=settings.cert_path)
    ssl_context.verify_mode = ssl.CERT_REQUIRED
    ssl_context.minimum_version = ssl.TLSVersion.TLSv1_2
    return ssl_context


def build_httpx_client_kwargs(settings: Settings, *, target_url: str | None = None) -> dict[str, Any]:
    """Build kwargs used for `httpx.AsyncClient`.

    Args:
        settings (Settings): Runtime settings.
        target_url (str | None): Target URL, used to pick the proxy matching its scheme.

    Returns:
        dict[str, Any]: Arguments for client constructors.
    """
    kwargs: dict[str, Any] = {
        "verify": build_ssl_context(settings),
        "timeout": settings.timeout,
    }

    scheme = urlparse(target_url).scheme if target_url else "https"
    proxy_url = settings.https_proxy if scheme == "https" else settings.http_proxy
    proxy_url = proxy_url or settings.https_proxy or settings.http_proxy
    if proxy_url:
        kwargs["proxy"] = proxy_url

    return kwargs


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        if _is_missing_settings_error(exc):
            ensure_env_file_exists()
            try:
                return Settings()
            except Exception as retry_exc:
                raise SettingsError(exc=retry_exc) from retry_exc
        raise SettingsError(exc=exc) from exc


def ensure_env_file_exists(
    *,
    env_path: Path = Path(".env"),
    template_path: Path = Path(".env.template"),
) -> None:
    """Create `.env` from template when missing.

    Args:
        env_path (Path): Target environment file path.
        template_path (Path): Template file path.
    """
    if env_path.exists() or not template_path.exists():
        return
    env_path.write_text(template_path.read_text(encoding="utf-8"), encoding="utf-8")
    logger.info(
        "Created environment file from template",
        extra={"env_path": str(env_path), "template_path": str(template_path)},
    )


def _is_missing_settings_error(exc: Exception) -> bool:
    """Return whether the settings failure is due to missing values."""
    if not isinstance(exc, ValidationError):
        return False
    return any(error.get("type") == "missing" for error in exc.errors())
