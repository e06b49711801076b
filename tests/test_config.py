from __future__ import annotations

import logging

import pytest

from fastapi.testclient import TestClient

from app.config import AI_PROVIDERS, DEFAULT_PROVIDER, Settings, load_settings
from app.main import create_app
from app.startup import validate_config

ENV_KEYS = ("AI_PROVIDER", "AI_API_KEY", "AI_MODEL", "AI_BASE_URL", "LOG_LEVEL", "HOST", "PORT")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    settings = load_settings()

    assert settings.ai_provider == DEFAULT_PROVIDER
    assert settings.ai_api_key == ""
    assert settings.ai_model == AI_PROVIDERS[DEFAULT_PROVIDER]["default_model"]
    assert settings.ai_base_url == AI_PROVIDERS[DEFAULT_PROVIDER]["base_url"]
    assert settings.log_level == "INFO"
    assert settings.port == 8000
    assert settings.ai_enabled is False


def test_provider_defaults_apply(monkeypatch) -> None:
    monkeypatch.setenv("AI_PROVIDER", " Groq ")
    monkeypatch.setenv("AI_API_KEY", "gsk-test")

    settings = load_settings()

    assert settings.ai_provider == "groq"
    assert settings.ai_model == "llama-3.1-8b-instant"
    assert settings.ai_base_url == "https://api.groq.com/openai/v1"
    assert settings.ai_enabled is True


def test_explicit_model_and_base_url_win(monkeypatch) -> None:
    monkeypatch.setenv("AI_PROVIDER", "openai")
    monkeypatch.setenv("AI_MODEL", "gpt-4o")
    monkeypatch.setenv("AI_BASE_URL", "http://proxy.internal/v1")

    settings = load_settings()

    assert settings.ai_model == "gpt-4o"
    assert settings.ai_base_url == "http://proxy.internal/v1"


def test_unknown_provider_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("AI_PROVIDER", "mystery")

    assert load_settings().ai_provider == DEFAULT_PROVIDER


def test_server_settings(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "not-a-port")

    settings = load_settings()

    assert settings.log_level == "DEBUG"
    assert settings.host == "127.0.0.1"
    assert settings.port == 8000


def test_settings_are_immutable() -> None:
    settings = Settings()

    with pytest.raises(AttributeError):
        settings.ai_api_key = "changed"


def test_startup_warns_without_env_file(tmp_path, monkeypatch, caplog) -> None:
    monkeypatch.chdir(tmp_path)

    with caplog.at_level(logging.WARNING, logger="app.startup"):
        validate_config(Settings())

    assert ".env file not found. AI features will be disabled." in caplog.messages


def test_startup_warns_about_missing_key(tmp_path, monkeypatch, caplog) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("LOG_LEVEL=INFO\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="app.startup"):
        validate_config(Settings())

    assert "AI_API_KEY not set in .env. AI features will be disabled." in caplog.messages


def test_startup_is_quiet_when_ai_is_configured(tmp_path, monkeypatch, caplog) -> None:
    monkeypatch.chdir(tmp_path)

    with caplog.at_level(logging.WARNING, logger="app.startup"):
        validate_config(Settings(ai_api_key="key"))

    assert caplog.messages == []


def test_app_startup_validates_config(tmp_path, monkeypatch, caplog, stub_ai) -> None:
    monkeypatch.chdir(tmp_path)
    app = create_app(Settings(), ai_service=stub_ai)

    with caplog.at_level(logging.WARNING, logger="app.startup"):
        with TestClient(app) as client:
            assert client.get("/health").status_code == 200

    assert ".env file not found. AI features will be disabled." in caplog.messages
