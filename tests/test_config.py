"""Tests for client settings."""

import pytest
from pydantic import ValidationError

from shelfwise_cli.config import Settings, get_settings, reload_settings


def test_defaults(settings):
    assert settings.debounce_ms == 500
    assert settings.initial_query == ""
    assert settings.window_size == 2
    assert settings.page_size == 10
    assert settings.sort_by == "accessionNumber"
    assert settings.sort_dir == "ASC"


def test_data_dir_is_created(settings):
    assert settings.data_dir.is_dir()
    assert settings.preferences_path.parent == settings.data_dir


def test_sort_dir_is_normalised(tmp_path):
    settings = Settings(_env_file=None, data_dir=tmp_path, sort_dir="desc")
    assert settings.sort_dir == "DESC"


def test_invalid_values_rejected(tmp_path):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, data_dir=tmp_path, sort_dir="sideways")
    with pytest.raises(ValidationError):
        Settings(_env_file=None, data_dir=tmp_path, log_level="LOUD")
    with pytest.raises(ValidationError):
        Settings(_env_file=None, data_dir=tmp_path, page_size=0)


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("SHELFWISE_DEBOUNCE_MS", "250")
    monkeypatch.setenv("SHELFWISE_DATA_DIR", str(tmp_path))

    settings = reload_settings()

    assert settings.debounce_ms == 250
    assert get_settings() is settings
    get_settings.cache_clear()
