"""Tests for configuration functionality."""

from pathlib import Path

import pytest

from gitcopilot.config import Config, default_config_path
from gitcopilot.exceptions import ConfigurationError


def test_default_config():
    """Test default configuration values."""
    config = Config()
    assert config.api_key == ""
    assert config.model == "deepseek-chat"
    assert config.api_url == "https://api.deepseek.com/v1/chat/completions"
    assert config.request_timeout is None
    assert config.log_file is None


def test_default_config_path_uses_env(isolated_config):
    assert default_config_path() == isolated_config / "config.toml"


def test_config_load_nonexistent(tmp_path):
    """Test loading configuration when file doesn't exist."""
    config = Config.load(tmp_path / "missing.toml")
    assert config.model == "deepseek-chat"


def test_config_load_and_save(tmp_path):
    """Test saving and loading configuration."""
    config_path = tmp_path / "nested" / "config.toml"
    config = Config(
        api_key="sk-saved",
        model="deepseek-coder",
        request_timeout=30,
        log_file="commits.log",
    )

    written = config.save(config_path)
    loaded_config = Config.load(config_path)

    assert written == config_path
    assert loaded_config.api_key == "sk-saved"
    assert loaded_config.model == "deepseek-coder"
    assert loaded_config.request_timeout == 30.0
    assert loaded_config.log_file == "commits.log"


def test_save_skips_unset_values(tmp_path):
    config_path = tmp_path / "config.toml"
    Config(api_key="sk-saved").save(config_path)

    content = config_path.read_text()
    assert "api_key" in content
    assert "request_timeout" not in content
    assert "log_file" not in content


def test_config_load_invalid(tmp_path):
    """Test loading invalid configuration file."""
    config_path = tmp_path / "config.toml"
    config_path.write_text("invalid [ toml")

    config = Config.load(config_path)
    assert config.api_key == ""


def test_config_load_invalid_value(tmp_path):
    config_path = tmp_path / "config.toml"
    config_path.write_text('request_timeout = "soon"\n')

    config = Config.load(config_path)
    assert config.request_timeout is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GIT_COPILOT_API_KEY", "sk-env\x07")
    monkeypatch.setenv("GIT_COPILOT_REQUEST_TIMEOUT", "15")

    config = Config()

    assert config.api_key == "sk-env"
    assert config.request_timeout == 15.0


def test_explicit_values_win_over_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("GIT_COPILOT_MODEL", "env-model")
    config_path = tmp_path / "config.toml"
    Config(model="file-model").save(config_path)

    assert Config.load(config_path).model == "file-model"
    assert Config().model == "env-model"


def test_set_value():
    config = Config()

    config.set_value("api_key", "  sk-new  ")
    config.set_value("request_timeout", "20")

    assert config.api_key == "sk-new"
    assert config.request_timeout == 20.0


def test_set_value_clears_optional_field():
    config = Config(log_file="commits.log")

    config.set_value("log_file", "")

    assert config.log_file is None
    assert config.get_log_file() is None


def test_set_value_unknown_key():
    with pytest.raises(ConfigurationError, match="Unknown configuration key"):
        Config().set_value("colour", "blue")


def test_set_value_invalid_value():
    config = Config()
    with pytest.raises(ConfigurationError, match="request_timeout"):
        config.set_value("request_timeout", "later")
    assert config.request_timeout is None


def test_get_log_file_custom():
    config = Config(log_file="custom.log")
    assert config.get_log_file() == Path("custom.log")


def test_save_skips_environment_values(monkeypatch, tmp_path):
    monkeypatch.setenv("GIT_COPILOT_API_KEY", "sk-env")
    config_path = tmp_path / "config.toml"

    config = Config.load(config_path)
    config.set_value("model", "deepseek-coder")
    config.save(config_path)

    content = config_path.read_text()
    assert "api_key" not in content
    assert "deepseek-coder" in content
    assert config.api_key == "sk-env"


def test_set_value_persists_over_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("GIT_COPILOT_MODEL", "env-model")
    config_path = tmp_path / "config.toml"

    config = Config()
    config.set_value("model", "deepseek-coder")
    config.save(config_path)

    assert 'model = "deepseek-coder"' in config_path.read_text()


def test_invalid_environment_value(monkeypatch, tmp_path):
    monkeypatch.setenv("GIT_COPILOT_REQUEST_TIMEOUT", "soon")

    with pytest.raises(ConfigurationError, match="GIT_COPILOT_REQUEST_TIMEOUT"):
        Config()
    with pytest.raises(ConfigurationError, match="GIT_COPILOT_REQUEST_TIMEOUT"):
        Config.load(tmp_path / "missing.toml")


def test_invalid_environment_value_overridden_by_file(monkeypatch, tmp_path):
    monkeypatch.setenv("GIT_COPILOT_REQUEST_TIMEOUT", "soon")
    config_path = tmp_path / "config.toml"
    config_path.write_text("request_timeout = 30.0\n")

    assert Config.load(config_path).request_timeout == 30.0


def test_field_source(monkeypatch, tmp_path):
    monkeypatch.setenv("GIT_COPILOT_API_KEY", "sk-env")
    config_path = tmp_path / "config.toml"
    config_path.write_text('model = "deepseek-coder"\n')

    config = Config.load(config_path)

    assert config.field_source("model") == "config"
    assert config.field_source("api_key") == "env"
    assert config.field_source("log_file") == "default"
