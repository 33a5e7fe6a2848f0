"""Tests for commitsmith.global_config module."""

import json
import os
import stat

import pytest
from pydantic import ValidationError

from commitsmith.config import LLMProvider
from commitsmith.exceptions import ConfigurationError
from commitsmith.global_config import (
    AppConfig,
    ProviderConfig,
    ensure_config_file,
    get_config_file_path,
    is_configured,
    load_app_config,
    resolve_provider_config,
    save_app_config,
    set_provider_and_model,
)


class TestModels:
    """Tests for the pydantic configuration models."""

    def test_app_config_defaults(self):
        config = AppConfig()

        assert config.default_provider == "openai"
        assert config.providers == {}
        assert config.max_tokens == 500
        assert config.commit_style == "conventional"
        assert config.truncate_lines == 1000
        assert config.max_line_width == 300
        assert config.request_timeout == 60.0

    @pytest.mark.parametrize("temperature", [-0.1, 1.5])
    def test_temperature_out_of_range(self, temperature):
        with pytest.raises(ValidationError):
            ProviderConfig(temperature=temperature)

    def test_max_tokens_must_be_positive(self):
        with pytest.raises(ValidationError):
            AppConfig(max_tokens=0)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            AppConfig(request_timeout=0)


class TestConfigFilePath:
    """Tests for config file location."""

    def test_default_location(self, isolated_config):
        assert get_config_file_path() == isolated_config / "config.json"
        assert is_configured() is False

    def test_env_override(self, isolated_config, temp_dir, monkeypatch):
        custom = temp_dir / "custom.json"
        monkeypatch.setenv("COMMITSMITH_CONFIG", str(custom))

        assert get_config_file_path() == custom


class TestLoadSave:
    """Tests for load_app_config and save_app_config."""

    def test_missing_file_gives_defaults(self, isolated_config):
        assert load_app_config() == AppConfig()

    def test_round_trip(self, isolated_config, app_config):
        path = save_app_config(app_config)

        assert path == isolated_config / "config.json"
        assert load_app_config() == app_config

    def test_saved_file_is_owner_only(self, isolated_config, app_config):
        path = save_app_config(app_config)

        mode = stat.S_IMODE(os.stat(path).st_mode)
        assert mode == stat.S_IRUSR | stat.S_IWUSR

    def test_saved_file_is_readable_json(self, isolated_config, app_config):
        path = save_app_config(app_config)

        data = json.loads(path.read_text())
        assert data["providers"]["openai"]["api_key"] == "sk-test-key"
        assert "commit_style" not in data["providers"]["openai"]

    def test_partial_file_uses_defaults(self, isolated_config):
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.json").write_text('{"commit_style": "detailed"}')

        config = load_app_config()
        assert config.commit_style == "detailed"
        assert config.max_tokens == 500

    def test_invalid_json(self, isolated_config):
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.json").write_text("{not json")

        with pytest.raises(ConfigurationError, match="Invalid config"):
            load_app_config()

    def test_invalid_value(self, isolated_config):
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.json").write_text(
            '{"providers": {"openai": {"temperature": 3}}}'
        )

        with pytest.raises(ConfigurationError, match="temperature"):
            load_app_config()

    def test_ensure_config_file_creates_starter(self, isolated_config):
        path = ensure_config_file()

        assert path == isolated_config / "config.json"
        config = load_app_config()
        assert config.default_provider == "openai"
        assert config.providers["openai"].model == "gpt-4o-mini"
        assert config.providers["openai"].api_key == ""

    def test_ensure_config_file_keeps_existing(self, isolated_config, app_config):
        save_app_config(app_config)

        ensure_config_file()

        assert load_app_config() == app_config

    def test_set_provider_and_model(self, isolated_config, app_config):
        save_app_config(app_config)

        set_provider_and_model(LLMProvider.ANTHROPIC, "claude-3-5-sonnet-latest")

        config = load_app_config()
        assert config.default_provider == "anthropic"
        assert config.providers["anthropic"].model == "claude-3-5-sonnet-latest"
        # Other providers are untouched
        assert config.providers["openai"].api_key == "sk-test-key"


class TestResolveProviderConfig:
    """Tests for resolve_provider_config."""

    def test_config_values_win(self, app_config, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")

        resolved = resolve_provider_config(app_config, "openai")
        assert resolved.api_key == "sk-test-key"
        assert resolved.model == "gpt-4o-mini"

    def test_blank_api_key_falls_back_to_env(self, clean_provider_env, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-env")

        resolved = resolve_provider_config(AppConfig(), "anthropic")
        assert resolved.api_key == "sk-ant-env"
        assert resolved.model == "claude-3-5-haiku-latest"

    def test_ollama_uri_from_env(self, clean_provider_env, monkeypatch):
        monkeypatch.setenv("OLLAMA_URI", "http://gpu-box:11434")

        resolved = resolve_provider_config(AppConfig(), "ollama")
        assert resolved.uri == "http://gpu-box:11434"

    def test_nothing_available_stays_blank(self, clean_provider_env):
        resolved = resolve_provider_config(AppConfig(), "google")
        assert resolved.api_key == ""

    def test_loaded_config_not_modified(self, app_config, clean_provider_env, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "g-env")

        resolve_provider_config(app_config, "google")
        assert "google" not in app_config.providers

    def test_unknown_provider(self, app_config):
        with pytest.raises(ConfigurationError):
            resolve_provider_config(app_config, "azure")
