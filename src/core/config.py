"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El cliente HTTP, los servicios y el servidor MCP leen el mismo objeto
  (inmutable una vez construido).

Precedencia: flags de la CLI > variables de entorno > `.env` del proyecto >
`.env` global del usuario > defaults.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import httpx
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import ConfigError

APP_DIR_NAME = "replicated-mcp-server"
DEFAULT_ENDPOINT = "https://api.replicated.com/vendor"
VALID_LOG_LEVELS = ("fatal", "error", "info", "debug", "trace")

TOKEN_REQUIRED_MESSAGE = (
    "API token is required. Set REPLICATED_API_TOKEN environment variable or use --api-token flag"
)


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key:
            data[key] = value.strip().strip('"').strip("'")
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves existentes se conservan; los valores `None` se ignoran.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# replicated-mcp-server user config (.env)"]
    for key in sorted(existing):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters/servidor.
    """

    model_config = SettingsConfigDict(
        env_prefix="REPLICATED_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_token: str | None = Field(
        default=None,
        description="Token de la API del Vendor Portal (se envía tal cual en Authorization).",
    )
    endpoint: str = Field(
        default=DEFAULT_ENDPOINT,
        description="Base URL de la API (scheme + host obligatorios).",
    )
    timeout_seconds: float = Field(
        default=30.0,
        ge=1,
        le=300,
        description="Timeout uniforme por request (segundos).",
    )
    log_level: str = Field(
        default="fatal",
        description="fatal | error | info | debug | trace",
    )
    user_agent: str = Field(
        default="replicated-mcp-server",
        min_length=1,
        description="User-Agent para las peticiones salientes.",
    )
    strict_validation: bool = Field(
        default=False,
        description="Si es True, una entidad inválida hace fallar la operación (si no, solo warning).",
    )
    max_retries: int = Field(
        default=0,
        ge=0,
        le=10,
        description="Reintentos ante fallos transitorios (red, 429, 502/503/504). 0 = sin reintentos.",
    )
    backoff_base_seconds: float = Field(
        default=0.5,
        gt=0,
        description="Base del backoff exponencial entre reintentos (segundos).",
    )
    search_page_size: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Tamaño de la página que se descarga para las búsquedas list-and-filter.",
    )

    @field_validator("api_token", mode="before")
    @classmethod
    def _blank_token_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _check_log_level(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        level = value.strip().lower()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"invalid log level '{value}'. Valid levels are: {', '.join(VALID_LOG_LEVELS)}"
            )
        return level

    @field_validator("endpoint")
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise ValueError(f"invalid endpoint URL '{value}': {exc}") from exc
        if not url.scheme or not url.host:
            raise ValueError(
                f"invalid endpoint URL '{value}': must include scheme and host (e.g., https://api.example.com)"
            )
        return value.rstrip("/")

    def require_api_token(self) -> str:
        """Devuelve el token o lanza `ConfigError` (no se puede servir sin él)."""

        if not self.api_token:
            raise ConfigError(TOKEN_REQUIRED_MESSAGE)
        return self.api_token

    def describe(self) -> str:
        """Resumen apto para logs: el token nunca aparece."""

        token = "(set)" if self.api_token else "(not set)"
        timeout = f"{self.timeout_seconds:g}s"
        return (
            f"Config{{APIToken: {token}, LogLevel: {self.log_level}, "
            f"Timeout: {timeout}, Endpoint: {self.endpoint}}}"
        )


def load_settings(**overrides: object) -> AppSettings:
    """Construye `AppSettings` aplicando overrides (flags de la CLI) sobre el entorno.

    Los overrides `None` se ignoran (flag no indicado). Los errores de
    validación se agregan en un único `ConfigError`.
    """

    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return AppSettings(**values)
    except ValidationError as exc:
        problems = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "settings"
            message = str(error["msg"]).removeprefix("Value error, ")
            problems.append(f"{field}: {message}")
        raise ConfigError("configuration validation errors:\n  - " + "\n  - ".join(problems)) from exc
