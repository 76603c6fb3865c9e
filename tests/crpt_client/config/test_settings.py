from __future__ import annotations

import pytest
from pydantic import ValidationError

from crpt_client.config.settings import AppConfig
from crpt_client.config.urls import DOCUMENT_CREATE_URL
from crpt_client.core.domain.enums import TimeUnit


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "CRPT_CLIENT_API_URL",
        "CRPT_CLIENT_TIME_UNIT",
        "CRPT_CLIENT_REQUEST_LIMIT",
        "CRPT_CLIENT_HTTP_TIMEOUT_SECONDS",
        "CRPT_CLIENT_MAX_WORKERS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    cfg = AppConfig()
    assert cfg.api_url == DOCUMENT_CREATE_URL
    assert cfg.time_unit is TimeUnit.SECONDS
    assert cfg.request_limit == 5
    assert cfg.window_seconds == 1.0
    assert cfg.http_timeout_seconds == 20.0
    assert cfg.max_workers == 8


def test_loads_from_environment(monkeypatch):
    monkeypatch.setenv("CRPT_CLIENT_TIME_UNIT", "minute")
    monkeypatch.setenv("CRPT_CLIENT_REQUEST_LIMIT", "100")
    monkeypatch.setenv("CRPT_CLIENT_API_URL", "https://sandbox.test/create")
    cfg = AppConfig()
    assert cfg.time_unit is TimeUnit.MINUTES
    assert cfg.window_seconds == 60.0
    assert cfg.request_limit == 100
    assert cfg.api_url == "https://sandbox.test/create"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"request_limit": 0},
        {"http_timeout_seconds": 0},
        {"max_workers": 0},
        {"time_unit": "fortnight"},
        {"unknown_setting": 1},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValidationError):
        AppConfig(**kwargs)
