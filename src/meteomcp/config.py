"""Configuration models and the YAML settings loader.

Typical usage::

    settings = load_settings(Path("meteomcp.yaml"))
    async with MeteoChileClient(settings.meteochile) as client:
        ...

Every section has defaults, so an empty (or absent) file yields a working
configuration pointed at the public MeteoChile service.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

CONFIG_ENV_VAR = "METEOMCP_CONFIG"
DEFAULT_BASE_URL = "https://climatologia.meteochile.gob.cl/application/servicios/"


class ConfigError(Exception):
    """Raised when a settings file cannot be read or fails validation."""


class UpstreamSettings(BaseModel):
    """Where and how to reach the MeteoChile web service."""

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def _trailing_slash(cls, value: str) -> str:
        # Endpoints are joined as relative paths.
        return value if value.endswith("/") else value + "/"


class ServerSettings(BaseModel):
    """Identity reported by the stdio server in its ``initialize`` reply."""

    name: str = "meteochile-mcp-server"
    version: str = "1.0.0"
    protocol_version: str = "2024-11-05"


class HttpSettings(BaseModel):
    """Bind address for the REST API."""

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=0, le=65535)


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class Settings(BaseModel):
    """Top-level settings document."""

    meteochile: UpstreamSettings = Field(default_factory=UpstreamSettings)
    mcp_server: ServerSettings = Field(default_factory=ServerSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)


class SettingsLoader:
    """Load and validate a YAML settings file into :class:`Settings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> Settings:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.

        Raises:
            ConfigError: On read errors, YAML parse errors or validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Settings YAML must be a mapping")

        try:
            return Settings.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


def load_settings(path: Path | None = None) -> Settings:
    """Resolve the settings file and load it.

    Lookup order: explicit *path*, then ``$METEOMCP_CONFIG``, then built-in
    defaults.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return Settings()
        path = Path(env_path)
    return SettingsLoader(path).load()
