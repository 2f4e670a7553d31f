"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pricing.config import PriceCacheSettings

ENV_VARS = (
    "PRICE_SOURCE_DELAY",
    "PRICE_FETCH_TIMEOUT",
    "PRICE_SINGLE_FLIGHT",
    "METRICS_ENABLE",
    "PROMETHEUS_PORT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = PriceCacheSettings.from_env()
    assert settings.source_delay == 2.0
    assert settings.fetch_timeout is None
    assert settings.single_flight is True
    assert settings.metrics_enable is False
    assert settings.prometheus_port == 9108
    assert settings.log_level == "INFO"


def test_values_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("PRICE_SOURCE_DELAY", "0.25")
    monkeypatch.setenv("PRICE_FETCH_TIMEOUT", "5")
    monkeypatch.setenv("PRICE_SINGLE_FLIGHT", "no")
    monkeypatch.setenv("METRICS_ENABLE", "yes")
    monkeypatch.setenv("PROMETHEUS_PORT", "9200")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = PriceCacheSettings.from_env()
    assert settings.source_delay == 0.25
    assert settings.fetch_timeout == 5.0
    assert settings.single_flight is False
    assert settings.metrics_enable is True
    assert settings.prometheus_port == 9200
    assert settings.log_level == "DEBUG"


def test_empty_timeout_means_no_timeout(monkeypatch) -> None:
    monkeypatch.setenv("PRICE_FETCH_TIMEOUT", "  ")
    assert PriceCacheSettings.from_env().fetch_timeout is None


@pytest.mark.parametrize(
    "name, value",
    [
        ("PRICE_SOURCE_DELAY", "-1"),
        ("PRICE_SOURCE_DELAY", "soon"),
        ("PRICE_FETCH_TIMEOUT", "0"),
        ("PROMETHEUS_PORT", "70000"),
        ("LOG_LEVEL", "verbose"),
    ],
)
def test_invalid_values_are_rejected(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        PriceCacheSettings.from_env()
