"""Unit tests for settings loading."""

import pytest
from pydantic import ValidationError

from src.config import DEFAULT_PORT, load_settings
from src.core import ConfigurationException

# pylint: disable=magic-value-comparison


def test_port_defaults_to_8000_without_env_file(missing_env_file):
    """Test a missing env file falls back to the default port."""
    settings = load_settings(missing_env_file)
    assert settings.port == DEFAULT_PORT == 8000


def test_port_defaults_to_8000_for_empty_env_file(env_file):
    """Test an empty env file falls back to the default port."""
    assert load_settings(env_file("")).port == 8000


def test_blank_port_is_treated_as_unset(env_file):
    """Test ``PORT=`` behaves like an absent key."""
    assert load_settings(env_file("PORT=\n")).port == 8000


@pytest.mark.parametrize("port", [1, 3000, 4000, 65535])
def test_port_read_from_env_file(env_file, port):
    """Test PORT in the env file is used as-is."""
    assert load_settings(env_file(f"PORT={port}\n")).port == port


def test_process_environment_overrides_env_file(env_file, monkeypatch):
    """Test a real environment variable wins over the env file."""
    path = env_file("PORT=4000\n")
    monkeypatch.setenv("PORT", "5000")
    assert load_settings(path).port == 5000


def test_keys_are_case_insensitive(env_file):
    """Test lowercase keys in the env file are recognised."""
    assert load_settings(env_file("port=4100\n")).port == 4100


def test_unknown_keys_are_ignored(env_file):
    """Test unrelated keys in the env file do not fail loading."""
    settings = load_settings(env_file("MONGODB_URI=mongodb://db\nPORT=4000\n"))
    assert settings.port == 4000


@pytest.mark.parametrize("value", ["abc", "0", "70000", "-1"])
def test_invalid_port_raises_configuration_exception(env_file, value):
    """Test PORT values that are not a usable port are rejected."""
    with pytest.raises(ConfigurationException, match="Invalid configuration") as exc_info:
        load_settings(env_file(f"PORT={value}\n"))
    fields = [err["field"] for err in exc_info.value.details["errors"]]
    assert fields == ["port"]


def test_invalid_environment_raises_configuration_exception(env_file):
    """Test ENVIRONMENT must be one of the known names."""
    with pytest.raises(ConfigurationException):
        load_settings(env_file("ENVIRONMENT=qa\n"))


def test_log_level_is_normalised(env_file):
    """Test LOG_LEVEL is upper-cased."""
    assert load_settings(env_file("LOG_LEVEL=debug\n")).log_level == "DEBUG"


def test_loading_twice_yields_same_settings(env_file):
    """Test loading the same file twice gives equal settings and the same port."""
    path = env_file("PORT=4000\nDATABASE_URL=sqlite+aiosqlite:///app.db\n")
    first = load_settings(path)
    second = load_settings(path)
    assert first == second
    assert first.port == second.port == 4000


def test_loading_does_not_touch_process_environment(env_file):
    """Test the env file is not copied into os.environ."""
    import os

    load_settings(env_file("PORT=4000\n"))
    assert "PORT" not in os.environ


def test_settings_are_immutable(missing_env_file):
    """Test settings cannot be changed after load."""
    settings = load_settings(missing_env_file)
    with pytest.raises(ValidationError):
        settings.port = 9000
