import importlib

import pytest

from config import get_settings_module


@pytest.mark.parametrize(
    "env, expected",
    [
        ("production", "config.production"),
        ("prod", "config.production"),
        ("TESTING", "config.testing"),
        ("test", "config.testing"),
        ("anything-else", "config.development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)
    assert get_settings_module() == expected


def test_default_is_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_settings_module() == "config.development"


def test_testing_settings_run_sync_sequentially():
    settings = importlib.import_module("config.testing")

    assert settings.SYNC_MAX_WORKERS == 1
    assert settings.DB_CONFIG["database"] == "insight_edu_test"
