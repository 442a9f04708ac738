from __future__ import annotations

from pathlib import Path

import pytest

from epoch_api.settings import get_settings, reload_settings


def test_settings_reads_from_dotenv(tmp_path: Path) -> None:
    """Values stored in a local .env file should be honoured."""

    (tmp_path / ".env").write_text(
        """
EPOCH_APP_NAME=Epoch Test
EPOCH_API_DOCS_ENABLED=true
EPOCH_DEFAULT_TIMEZONE=Europe/London
EPOCH_SERVER_CORS_ORIGINS=http://localhost:3000,http://example.dev:4000
"""
    )
    reload_settings()

    settings = get_settings()

    assert settings.app_name == "Epoch Test"
    assert settings.api_docs_enabled is True
    assert settings.default_timezone == "Europe/London"
    assert settings.server_cors_origins == [
        "http://localhost:3000",
        "http://example.dev:4000",
    ]


def test_settings_env_var_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables should have the final say."""

    (tmp_path / ".env").write_text("EPOCH_DEFAULT_FORMAT=uk\n")
    monkeypatch.setenv("EPOCH_DEFAULT_FORMAT", "long")
    monkeypatch.setenv("EPOCH_SERVER_PORT", "9001")
    monkeypatch.setenv("EPOCH_BATCH_WORKERS", "4")
    reload_settings()

    settings = get_settings()

    assert settings.default_format == "long"
    assert settings.server_port == 9001
    assert settings.batch_workers == 4


def test_cors_deduplicates_origins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(
        "EPOCH_SERVER_CORS_ORIGINS",
        "http://one.test, http://two.test,http://one.test",
    )
    reload_settings()

    assert get_settings().server_cors_origins == ["http://one.test", "http://two.test"]


def test_cors_accepts_json_array(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EPOCH_SERVER_CORS_ORIGINS", '["http://one.test", ""]')
    reload_settings()

    assert get_settings().server_cors_origins == ["http://one.test"]


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
    assert reload_settings() is get_settings()
