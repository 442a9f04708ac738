from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from epoch_api.cli import app
from epoch_api.settings import reload_settings

runner = CliRunner()


def test_to_date_prints_json() -> None:
    result = runner.invoke(app, ["to-date", "1640995200000", "--timezone", "Asia/Tokyo", "-f", "long"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "timestamp": 1640995200,
        "date": "2022-01-01T09:00:00+09:00",
        "formatted": "January 01, 2022 09:00:00 AM JST",
        "timezone": "Asia/Tokyo",
    }


def test_to_date_uses_configured_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EPOCH_DEFAULT_TIMEZONE", "America/New_York")
    monkeypatch.setenv("EPOCH_DEFAULT_FORMAT", "us")
    reload_settings()

    result = runner.invoke(app, ["to-date", "1640995200"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["timezone"] == "America/New_York"
    assert payload["formatted"] == "12/31/2021 07:00:00 PM EST"


def test_to_date_reports_rejections() -> None:
    result = runner.invoke(app, ["to-date", "4102444801"])

    assert result.exit_code == 1
    assert "Error: out of supported range (1970-2100)" in result.output


def test_to_timestamp_prints_json() -> None:
    result = runner.invoke(app, ["to-timestamp", "2022-01-01", "-z", "America/New_York"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "date": "2022-01-01T05:00:00.000Z",
        "timestamp": 1641013200,
        "milliseconds": 1641013200000,
        "timezone": "America/New_York",
    }


def test_to_timestamp_reports_invalid_timezone() -> None:
    result = runner.invoke(app, ["to-timestamp", "2022-01-01", "--timezone", "Nowhere/Special"])

    assert result.exit_code == 1
    assert "Error: invalid timezone: Nowhere/Special" in result.output


def test_batch_reports_per_value_errors() -> None:
    result = runner.invoke(app, ["batch", "1640995200", "abc"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "results": [
            {"input": "1640995200", "output": "2022-01-01T00:00:00.000Z"},
            {"input": "abc", "output": "", "error": "only digits allowed"},
        ]
    }


def test_batch_date_to_unix() -> None:
    result = runner.invoke(app, ["batch", "--type", "date-to-unix", "2022-01-01T00:00:00Z"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["results"] == [
        {"input": "2022-01-01T00:00:00Z", "output": "1640995200"},
    ]


def test_batch_rejects_unknown_type() -> None:
    result = runner.invoke(app, ["batch", "-t", "sideways", "1640995200"])

    assert result.exit_code == 1
    assert 'Invalid type. Must be "unix-to-date" or "date-to-unix"' in result.output


def test_batch_respects_configured_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EPOCH_BATCH_MAX_VALUES", "2")
    reload_settings()

    result = runner.invoke(app, ["batch", "1", "2", "3"])

    assert result.exit_code == 1
    assert "Error: batch too large, maximum 2 values" in result.output


def test_serve_runs_uvicorn_with_factory(monkeypatch: pytest.MonkeyPatch) -> None:
    import uvicorn

    calls: list[tuple[str, dict]] = []
    monkeypatch.setattr(uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))

    result = runner.invoke(app, ["serve", "--port", "9123"])

    assert result.exit_code == 0, result.output
    target, kwargs = calls[0]
    assert target == "epoch_api.main:create_app"
    assert kwargs["factory"] is True
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 9123


def test_to_date_rejects_overlong_timestamp_cleanly() -> None:
    result = runner.invoke(app, ["to-date", "9" * 5000])

    assert result.exit_code == 1
    assert "Error: out of supported range (1970-2100)" in result.output
