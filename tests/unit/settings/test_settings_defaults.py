from __future__ import annotations

import pytest
from pydantic import ValidationError

from epoch_api.settings import Settings, get_settings


def test_settings_defaults() -> None:
    settings = get_settings()

    assert settings.app_name == "Epoch Converter API"
    assert settings.api_docs_enabled is False
    assert settings.logging_level == "INFO"
    assert settings.server_host == "127.0.0.1"
    assert settings.server_port == 8000
    assert settings.server_cors_origins == ["*"]
    assert settings.default_timezone == "UTC"
    assert settings.default_format == "iso"
    assert settings.batch_max_values == 1000
    assert settings.batch_workers == 1


def test_logging_level_is_normalized() -> None:
    assert Settings(logging_level=" debug ").logging_level == "DEBUG"
    assert Settings(logging_level="").logging_level == "INFO"


def test_named_default_format_is_lowercased() -> None:
    assert Settings(default_format="US").default_format == "us"
    assert Settings(default_format="ISO").default_format == "iso"
    assert Settings(default_format="yyyy-MM-dd").default_format == "yyyy-MM-dd"


def test_unknown_default_timezone_is_rejected() -> None:
    with pytest.raises(ValidationError, match="EPOCH_DEFAULT_TIMEZONE is not a known zone"):
        Settings(default_timezone="Mars/Olympus")


def test_batch_limits_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(batch_max_values=0)
    with pytest.raises(ValidationError):
        Settings(batch_workers=0)
