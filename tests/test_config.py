"""Tests for environment-driven settings."""

from pathlib import Path

import pytest
from hushnote.config import get_settings, reset_settings_cache
from hushnote.services.document_store import onboarding_store_opener


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()


def test_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("ONBOARDING_STORE_NAME", raising=False)
    settings = get_settings()
    assert settings.database_url.startswith("sqlite+aiosqlite://")
    assert settings.onboarding_store_name == "onboarding-status.json"


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("ONBOARDING_STORE_NAME", "wizard.json")
    settings = get_settings()
    assert settings.app_data_dir == Path(tmp_path)
    assert settings.onboarding_store_name == "wizard.json"


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_store_opener_uses_configured_location(monkeypatch, tmp_path):
    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("ONBOARDING_STORE_NAME", "wizard.json")
    store = onboarding_store_opener()()
    store.set("status", {"completed": False})
    store.save()
    assert (tmp_path / "wizard.json").exists()
