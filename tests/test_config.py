from __future__ import annotations

import pytest

from nemo.config import Settings


@pytest.fixture(autouse=True)
def _clean_listen_env(monkeypatch):
    for name in ("API_PORT", "PORT", "API_HOST", "HOST"):
        monkeypatch.delenv(name, raising=False)


def test_listen_defaults():
    settings = Settings(_env_file=None)
    assert settings.api_host == "0.0.0.0"
    assert settings.api_port == 10000


def test_platform_port_and_host(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("HOST", "127.0.0.1")

    settings = Settings(_env_file=None)

    assert settings.api_port == 8080
    assert settings.api_host == "127.0.0.1"


def test_api_prefixed_names_take_precedence(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("API_PORT", "9000")

    assert Settings(_env_file=None).api_port == 9000


def test_field_names_accepted_as_keywords():
    assert Settings(_env_file=None, api_port=7000).api_port == 7000
