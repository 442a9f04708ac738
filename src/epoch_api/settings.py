"""Runtime configuration, read from ``EPOCH_*`` variables and a local ``.env``."""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import DotEnvSettingsSource, EnvSettingsSource

from epoch_api.engine import DEFAULT_STYLE, MAX_BATCH_VALUES, NAMED_STYLES, UTC_NAME, resolve_zone
from epoch_api.engine.errors import InvalidTimezoneError

DEFAULT_CORS_ORIGINS = ["*"]

# Fields parsed by their own validator rather than as JSON by the sources.
_RAW_LIST_FIELDS = frozenset({"server_cors_origins"})


def _split_list(value: Any, *, default: list[str]) -> list[str]:
    """Accept a JSON array, a comma separated string, or a sequence.

    Blank entries are dropped and duplicates removed, first one wins.
    """

    if value is None:
        return list(default)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return list(default)
        if text.startswith("["):
            try:
                value = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ValueError("Expected a JSON array") from exc
            if not isinstance(value, list):
                raise ValueError("Expected a JSON array")
        else:
            value = text.split(",")
    if not isinstance(value, list | tuple | set):
        raise TypeError("Expected string or list")
    items = [str(item).strip() for item in value]
    return list(dict.fromkeys(item for item in items if item)) or list(default)


class _RawListMixin:
    """Hand raw strings for list fields to the model instead of decoding JSON."""

    def prepare_field_value(self, field_name: str, field, value: Any, value_is_complex: bool) -> Any:
        if field_name in _RAW_LIST_FIELDS and isinstance(value, str):
            return value
        return super().prepare_field_value(field_name, field, value, value_is_complex)


class _EnvSource(_RawListMixin, EnvSettingsSource):
    pass


class _DotEnvSource(_RawListMixin, DotEnvSettingsSource):
    pass


class Settings(BaseSettings):
    """Application settings; every field maps to ``EPOCH_<FIELD_NAME>``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="EPOCH_",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Both sources pick up prefix, env_file and the rest from model_config.
        return (init_settings, _EnvSource(settings_cls), _DotEnvSource(settings_cls), file_secret_settings)

    # Application
    app_name: str = "Epoch Converter API"
    app_version: str = "1.0.0"
    api_docs_enabled: bool = False
    docs_url: str = "/docs"
    redoc_url: str = "/redoc"
    openapi_url: str = "/openapi.json"
    logging_level: str = "INFO"

    # Server
    server_host: str = "127.0.0.1"
    server_port: int = Field(8000, gt=0, lt=65536)
    server_cors_origins: list[str] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    # Conversion defaults, used when a request leaves them out
    default_timezone: str = UTC_NAME
    default_format: str = DEFAULT_STYLE

    # Batch
    batch_max_values: int = Field(MAX_BATCH_VALUES, gt=0)
    batch_workers: int = Field(1, ge=1)

    @field_validator("logging_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> str:
        return str(value or "").strip().upper() or "INFO"

    @field_validator("server_cors_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: Any) -> list[str]:
        return _split_list(value, default=DEFAULT_CORS_ORIGINS)

    @field_validator("default_timezone", mode="before")
    @classmethod
    def _known_zone(cls, value: Any) -> str:
        name = str(value or "").strip() or UTC_NAME
        try:
            resolve_zone(name)
        except InvalidTimezoneError as exc:
            raise ValueError(f"EPOCH_DEFAULT_TIMEZONE is not a known zone: {name}") from exc
        return name

    @field_validator("default_format", mode="before")
    @classmethod
    def _normalize_format(cls, value: Any) -> str:
        spec = str(value or "").strip()
        if not spec:
            return DEFAULT_STYLE
        # Named styles are case-insensitive; custom patterns are not.
        lowered = spec.lower()
        return lowered if lowered == DEFAULT_STYLE or lowered in NAMED_STYLES else spec


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, built on first use."""

    return Settings()


def reload_settings() -> Settings:
    """Drop the cached settings and read the environment again."""

    get_settings.cache_clear()
    return get_settings()


__all__ = ["DEFAULT_CORS_ORIGINS", "Settings", "get_settings", "reload_settings"]
